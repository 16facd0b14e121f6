"""
Token engine facade.

Holds only injected, read-only dependencies (signer settings, payload
passphrase, clock); every call is an independent computation, so one engine
can serve concurrent requests.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Any, Callable, Optional, Union

from .algorithms import SigningAlgorithm
from .builder import TokenBuilder
from .crypto import PayloadCrypt, base64_decode
from .encoder import encode
from .parser import parse
from .signer import SignerConfig, load_signer_settings, resolve_algorithm
from .token import Token
from .validation import ValidationData, validate
from .verifier import verify


class TokenEngine:
    """Encode, decode, validate and verify tokens for one signer configuration."""

    def __init__(
        self,
        signer: SignerConfig,
        *,
        passphrase: str = "",
        clock: Callable[[], float] = time.time,
        crypt: Optional[PayloadCrypt] = None,
    ):
        self.signer = load_signer_settings(signer)
        # Fail at construction on an unsupported algorithm; keys load per call.
        self.algorithm: SigningAlgorithm = resolve_algorithm(self.signer)
        self.passphrase = passphrase
        self.clock = clock
        self.crypt = crypt or PayloadCrypt()

    def now(self) -> int:
        return int(self.clock())

    def builder(self) -> TokenBuilder:
        """A fresh builder carrying the engine's payload passphrase."""
        return TokenBuilder().with_passphrase(self.passphrase)

    def encode(self, builder: TokenBuilder) -> str:
        return encode(builder, self.signer, now=self.now(), crypt=self.crypt)

    def decode(self, token: str) -> Token:
        return parse(token)

    def validate(self, token: Token, expected: Union[ValidationData, TokenBuilder]) -> None:
        if isinstance(expected, TokenBuilder):
            expected = ValidationData.from_builder(expected)
        if expected.now is None:
            expected = replace(expected, now=self.now())
        validate(token, expected)

    def verify(self, token: Token) -> bool:
        return verify(token, self.signer)

    def get_data(self, token: Token, name: str, passphrase: Optional[str] = None) -> Any:
        """Decrypt the claim ``name`` written with ``TokenBuilder.with_data``."""
        key = base64_decode(self.passphrase if passphrase is None else passphrase)
        return self.crypt.decrypt(token.get_claim(name), key)
