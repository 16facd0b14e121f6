"""
Per-claim payload encryption.

Selected claims (e.g. the admin id) travel inside the token as ciphertext that
only the server-side passphrase can open, even though the token itself is
publicly decodable.
"""

import base64
import binascii
import json
from typing import Any

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from shared.errors import CryptoError
from shared.logging import get_logger

logger = get_logger("passport.tokens.crypto")

_KDF_SALT = b"passport-payload-crypt"
_KDF_INFO = b"claim-encryption"


def base64_decode(contents: str) -> bytes:
    """Decode a configured base64 passphrase.

    An empty passphrase short-circuits to an empty key.
    """
    if not contents:
        return b""

    try:
        return base64.b64decode(contents, validate=True)
    except (binascii.Error, ValueError):
        raise CryptoError("Token payload passphrase is not valid base64") from None


class PayloadCrypt:
    """Encrypt and decrypt individual claim values with a raw key.

    Values are JSON-serialised before encryption so numbers and booleans come
    back with their original type.
    """

    def _cipher(self, key: bytes) -> Fernet:
        kdf = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=_KDF_SALT,
            info=_KDF_INFO,
        )
        return Fernet(base64.urlsafe_b64encode(kdf.derive(key)))

    def encrypt(self, value: Any, key: bytes) -> str:
        try:
            plaintext = json.dumps(value, separators=(",", ":")).encode("utf-8")
        except (TypeError, ValueError):
            raise CryptoError("Token payload value cannot be encrypted") from None
        return self._cipher(key).encrypt(plaintext).decode("ascii")

    def decrypt(self, ciphertext: str, key: bytes) -> Any:
        if not isinstance(ciphertext, str) or not ciphertext:
            raise CryptoError("Token payload value is not encrypted")

        try:
            plaintext = self._cipher(key).decrypt(ciphertext.encode("ascii"))
            return json.loads(plaintext.decode("utf-8"))
        except (InvalidToken, UnicodeError, ValueError) as e:
            logger.warning("Failed to decrypt token payload value", error=type(e).__name__)
            raise CryptoError() from None
