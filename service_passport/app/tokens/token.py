"""Decoded token value object and base64url helpers."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

_BASE64URL_RE = re.compile(r"^[A-Za-z0-9_-]*$")


def base64url_encode(data: bytes) -> str:
    """Unpadded base64url encoding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(segment: str) -> bytes:
    """Strict unpadded base64url decoding; raises ``ValueError`` on bad input."""
    if not _BASE64URL_RE.match(segment) or len(segment) % 4 == 1:
        raise ValueError("invalid base64url segment")
    try:
        decoded = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except binascii.Error as e:
        raise ValueError(str(e)) from e
    # Unused trailing bits must be zero so each byte string has one spelling.
    if base64url_encode(decoded) != segment:
        raise ValueError("non-canonical base64url segment")
    return decoded


@dataclass(frozen=True)
class Token:
    """A parsed compact token.

    ``signing_input`` is the ``header.payload`` prefix the signature covers and
    ``raw`` the full compact string as received.
    """

    headers: Dict[str, Any]
    claims: Dict[str, Any]
    signature: bytes
    signing_input: str
    raw: str = field(repr=False)

    def get_header(self, name: str, default: Optional[Any] = None) -> Any:
        return self.headers.get(name, default)

    def get_headers(self) -> Dict[str, Any]:
        return dict(self.headers)

    def get_claim(self, name: str, default: Optional[Any] = None) -> Any:
        return self.claims.get(name, default)

    def get_claims(self) -> Dict[str, Any]:
        """All claims as a mapping from claim name to that claim's value."""
        return {name: value for name, value in self.claims.items()}

    @property
    def algorithm(self) -> Optional[str]:
        return self.headers.get("alg")

    def __str__(self) -> str:
        return self.raw
