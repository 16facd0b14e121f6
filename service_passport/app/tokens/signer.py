"""
Signer resolution: configuration -> (algorithm, key material).

Signing and verifying use the same algorithm identifier with different key
material, so both are resolved together here. ``is_private`` selects the
private (signing) or public (verifying) branch; hmac uses the shared secret
for both. Keys are loaded fresh on every call.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from jwt.algorithms import Algorithm
from pydantic import ValidationError as PydanticValidationError

from shared.config import AsymmetricKeySettings, KeyFileSettings, SignerSettings
from shared.errors import ConfigError
from shared.logging import get_logger

from .algorithms import AlgorithmFamily, SigningAlgorithm

logger = get_logger("passport.tokens.signer")

SignerConfig = Union[SignerSettings, Mapping[str, Any]]


@dataclass(frozen=True)
class ResolvedSigner:
    """Algorithm, its PyJWT implementation and the key handle to use with it."""

    algorithm: SigningAlgorithm
    signer: Algorithm
    key: Any
    is_private: bool

    @property
    def name(self) -> str:
        return self.algorithm.name


def load_signer_settings(config: SignerConfig) -> SignerSettings:
    if isinstance(config, SignerSettings):
        return config
    try:
        return SignerSettings.model_validate(config)
    except PydanticValidationError as e:
        logger.error("Invalid signer configuration", error=str(e))
        raise ConfigError() from None


def resolve_algorithm(config: SignerConfig) -> SigningAlgorithm:
    """Resolve only the algorithm; no key material is touched."""
    settings = load_signer_settings(config)
    return SigningAlgorithm.from_names(settings.algorithm.type, settings.algorithm.sha)


def resolve_signer(config: SignerConfig, is_private: bool = True) -> ResolvedSigner:
    """Resolve the signer implementation and key handle for ``config``."""
    settings = load_signer_settings(config)
    algorithm = SigningAlgorithm.from_names(settings.algorithm.type, settings.algorithm.sha)

    if algorithm.family == AlgorithmFamily.HMAC:
        key = settings.hmac.secret
    elif algorithm.family == AlgorithmFamily.RSA:
        key = _load_key_pair_branch(settings.rsa, is_private, algorithm)
    elif algorithm.family == AlgorithmFamily.ECDSA:
        key = _load_key_pair_branch(settings.ecdsa, is_private, algorithm)
    elif algorithm.family == AlgorithmFamily.EDDSA:
        key = _load_key_pair_branch(settings.eddsa, is_private, algorithm)
    else:  # pragma: no cover - AlgorithmFamily is closed
        raise ConfigError("Unsupported signing algorithm", details={"type": algorithm.family.value})

    return ResolvedSigner(
        algorithm=algorithm,
        signer=algorithm.implementation(),
        key=key,
        is_private=is_private,
    )


def _load_key_pair_branch(settings: KeyFileSettings, is_private: bool, algorithm: SigningAlgorithm) -> Any:
    if not is_private:
        return _load_key_file(settings.public_key, algorithm, private=False)

    passphrase = None
    if isinstance(settings, AsymmetricKeySettings) and settings.passphrase:
        passphrase = _decode_passphrase(settings.passphrase, algorithm)
    return _load_key_file(settings.private_key, algorithm, private=True, passphrase=passphrase)


def _decode_passphrase(value: str, algorithm: SigningAlgorithm) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        logger.error("Private key passphrase is not valid base64", algorithm=algorithm.name)
        raise ConfigError("Private key passphrase is invalid") from None


def _load_key_file(path: str, algorithm: SigningAlgorithm, *, private: bool, passphrase: Optional[bytes] = None) -> Any:
    kind = "private" if private else "public"
    if not path:
        raise ConfigError(f"No {kind} key configured for {algorithm.family.value}")

    try:
        data = Path(path).read_bytes()
        if private:
            return serialization.load_pem_private_key(data, password=passphrase)
        return serialization.load_pem_public_key(data)
    except (OSError, ValueError, TypeError, UnsupportedAlgorithm) as e:
        # Path and loader detail stay in the server log.
        logger.error("Failed to load key file", algorithm=algorithm.name, kind=kind, path=path, error=str(e))
        raise ConfigError(f"Unable to load {kind} key for {algorithm.family.value}") from None
