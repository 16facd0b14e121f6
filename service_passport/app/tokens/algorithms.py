"""
Closed set of supported signing algorithms.

A signing algorithm is a family (hmac, rsa, ecdsa, eddsa) plus, for every
family except eddsa, a hash variant. Each combination maps to exactly one JWS
algorithm name and one PyJWT algorithm implementation; anything else is a
configuration error.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jwt.algorithms import Algorithm, ECAlgorithm, HMACAlgorithm, OKPAlgorithm, RSAAlgorithm

from shared.errors import ConfigError


class AlgorithmFamily(str, Enum):
    HMAC = "hmac"
    RSA = "rsa"
    ECDSA = "ecdsa"
    EDDSA = "eddsa"


class HashVariant(str, Enum):
    SHA256 = "256"
    SHA384 = "384"
    SHA512 = "512"


_JWS_PREFIX = {
    AlgorithmFamily.HMAC: "HS",
    AlgorithmFamily.RSA: "RS",
    AlgorithmFamily.ECDSA: "ES",
}

_IMPLEMENTATIONS = {
    AlgorithmFamily.HMAC: HMACAlgorithm,
    AlgorithmFamily.RSA: RSAAlgorithm,
    AlgorithmFamily.ECDSA: ECAlgorithm,
}

def parse_family(value: Optional[str]) -> AlgorithmFamily:
    if not value:
        raise ConfigError("Signing algorithm is not configured")
    try:
        return AlgorithmFamily(value.strip().lower())
    except ValueError:
        raise ConfigError("Unsupported signing algorithm", details={"type": value}) from None


def parse_variant(value: Optional[str]) -> HashVariant:
    """Accept ``Sha256``, ``sha256``, ``SHA-256`` or ``256``."""
    if not value:
        raise ConfigError("Signing algorithm hash is not configured")
    normalized = value.strip().lower().replace("-", "")
    if normalized.startswith("sha"):
        normalized = normalized[3:]
    try:
        return HashVariant(normalized)
    except ValueError:
        raise ConfigError("Unsupported signing algorithm hash", details={"sha": value}) from None


@dataclass(frozen=True)
class SigningAlgorithm:
    """One supported family/variant combination."""

    family: AlgorithmFamily
    variant: Optional[HashVariant] = None

    @classmethod
    def from_names(cls, family: Optional[str], variant: Optional[str] = None) -> "SigningAlgorithm":
        parsed_family = parse_family(family)
        if parsed_family == AlgorithmFamily.EDDSA:
            return cls(parsed_family)
        return cls(parsed_family, parse_variant(variant))

    @property
    def is_symmetric(self) -> bool:
        return self.family == AlgorithmFamily.HMAC

    @property
    def name(self) -> str:
        """JWS ``alg`` header value."""
        if self.family == AlgorithmFamily.EDDSA:
            return "EdDSA"
        return _JWS_PREFIX[self.family] + self.variant.value

    def implementation(self) -> Algorithm:
        """Build the PyJWT algorithm object that signs and verifies."""
        if self.family == AlgorithmFamily.EDDSA:
            return OKPAlgorithm()
        if self.variant is None:
            raise ConfigError("Signing algorithm hash is not configured")
        implementation = _IMPLEMENTATIONS[self.family]
        # Each PyJWT class carries its own hash constants (hashlib vs cryptography).
        return implementation(getattr(implementation, "SHA" + self.variant.value))
