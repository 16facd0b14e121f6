"""
Compact token parser.
"""

import hashlib
import json
from typing import Any, Dict

from shared.errors import ParseError
from shared.logging import get_logger

from .token import Token, base64url_decode

logger = get_logger("passport.tokens.parser")


def _fingerprint(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8", "replace")).hexdigest()[:16]


def _decode_json_segment(segment: str, name: str) -> Dict[str, Any]:
    data = json.loads(base64url_decode(segment).decode("utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{name} is not a JSON object")
    return data


def parse(token: str) -> Token:
    """Parse ``header.payload.signature`` into a :class:`Token`.

    Signature and claims are not checked here.
    """
    if not isinstance(token, str):
        raise ParseError("Token must be a string")

    try:
        parts = token.split(".")
        if len(parts) != 3:
            raise ValueError(f"expected 3 segments, got {len(parts)}")

        header_segment, payload_segment, signature_segment = parts
        headers = _decode_json_segment(header_segment, "header")
        if not headers.get("alg"):
            raise ValueError("header has no algorithm")

        claims = _decode_json_segment(payload_segment, "payload")
        signature = base64url_decode(signature_segment)
    except ValueError as e:
        # UnicodeDecodeError and JSONDecodeError are ValueErrors too.
        logger.warning("Token parse failed", error=str(e), token_fingerprint=_fingerprint(token))
        raise ParseError(token=token) from None

    return Token(
        headers=headers,
        claims=claims,
        signature=signature,
        signing_input=f"{header_segment}.{payload_segment}",
        raw=token,
    )
