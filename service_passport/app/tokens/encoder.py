"""
Token encoder: builder state + private signer -> compact signed token.
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional

from shared.errors import EncodeError
from shared.logging import get_logger

from .builder import TokenBuilder
from .crypto import PayloadCrypt, base64_decode
from .signer import SignerConfig, resolve_signer
from .token import base64url_encode

logger = get_logger("passport.tokens.encoder")


def _json_segment(data: Dict[str, Any]) -> str:
    return base64url_encode(json.dumps(data, separators=(",", ":")).encode("utf-8"))


def build_claims(builder: TokenBuilder, now: int, crypt: Optional[PayloadCrypt] = None) -> Dict[str, Any]:
    """Registered claims first, then custom claims, then encrypted data claims."""
    claims: Dict[str, Any] = {}
    for name, value in (
        ("iss", builder.issuer),
        ("aud", builder.audience),
        ("sub", builder.subject),
        ("jti", builder.jti),
    ):
        if value is not None:
            claims[name] = value

    claims["iat"] = now
    claims["nbf"] = now + builder.not_before
    claims["exp"] = now + builder.expires_in

    claims.update(builder.claims)

    if builder.data:
        crypt = crypt or PayloadCrypt()
        key = base64_decode(builder.passphrase)
        for name, value in builder.data.items():
            claims[name] = crypt.encrypt(value, key)

    return claims


def encode(
    builder: TokenBuilder,
    signer_config: SignerConfig,
    *,
    now: Optional[int] = None,
    crypt: Optional[PayloadCrypt] = None,
) -> str:
    """Encode and sign ``builder`` with the private branch of ``signer_config``.

    Any failure is logged here and surfaced as a bare :class:`EncodeError`.
    """
    issued_at = int(time.time()) if now is None else int(now)

    try:
        resolved = resolve_signer(signer_config, is_private=True)

        headers: Dict[str, Any] = {"typ": "JWT"}
        headers.update(builder.headers)
        headers["alg"] = resolved.name

        claims = build_claims(builder, issued_at, crypt)

        signing_input = f"{_json_segment(headers)}.{_json_segment(claims)}"
        key = resolved.signer.prepare_key(resolved.key)
        signature = resolved.signer.sign(signing_input.encode("ascii"), key)
    except Exception as e:
        logger.error(
            "Token encoding failed",
            error=str(e),
            error_type=type(e).__name__,
            jti=builder.jti,
        )
        raise EncodeError() from None

    token = f"{signing_input}.{base64url_encode(signature)}"
    logger.debug("Token encoded", alg=resolved.name, jti=builder.jti, exp=claims["exp"])
    return token
