"""
Claim and time-window validation.

Checks run in a fixed order and the first failure is reported:
issuer, audience, id, subject, issued-at, not-before, expiry. This module performs no
cryptography; see ``verifier`` for signatures.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional

from shared.errors import ValidationError, ValidationReason

from .builder import TokenBuilder
from .token import Token


@dataclass(frozen=True)
class ValidationData:
    """Expected claim values. ``None`` skips the corresponding identity check."""

    issuer: Optional[str] = None
    audience: Optional[str] = None
    subject: Optional[str] = None
    jti: Optional[str] = None
    leeway: int = 0
    now: Optional[int] = None

    @classmethod
    def from_builder(cls, builder: TokenBuilder, now: Optional[int] = None) -> "ValidationData":
        return cls(
            issuer=builder.issuer,
            audience=builder.audience,
            subject=builder.subject,
            jti=builder.jti,
            leeway=builder.leeway,
            now=now,
        )


def _audience_matches(claim: Any, expected: str) -> bool:
    if isinstance(claim, (list, tuple)):
        return expected in claim
    return claim == expected


def _numeric(token: Token, name: str) -> Optional[float]:
    value = token.get_claim(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        # A time claim that is not a number cannot place the token in a window.
        raise ValidationError(
            ValidationReason.EXPIRED if name == "exp" else ValidationReason.NOT_YET_VALID,
            f"Token claim '{name}' is not a timestamp",
        )
    return value


def validate(token: Token, data: ValidationData) -> None:
    """Raise :class:`ValidationError` unless ``token`` satisfies ``data``."""
    if data.issuer is not None and token.get_claim("iss") != data.issuer:
        raise ValidationError(ValidationReason.ISSUER_MISMATCH)

    if data.audience is not None and not _audience_matches(token.get_claim("aud"), data.audience):
        raise ValidationError(ValidationReason.AUDIENCE_MISMATCH)

    if data.jti is not None and token.get_claim("jti") != data.jti:
        raise ValidationError(ValidationReason.ID_MISMATCH)

    if data.subject is not None and token.get_claim("sub") != data.subject:
        raise ValidationError(ValidationReason.SUBJECT_MISMATCH)

    now = int(time.time()) if data.now is None else data.now
    leeway = max(0, data.leeway)

    issued_at = _numeric(token, "iat")
    if issued_at is not None and now < issued_at - leeway:
        raise ValidationError(ValidationReason.NOT_YET_VALID, "Token was issued in the future")

    not_before = _numeric(token, "nbf")
    if not_before is not None and now < not_before - leeway:
        raise ValidationError(ValidationReason.NOT_YET_VALID)

    expires_at = _numeric(token, "exp")
    if expires_at is not None and now > expires_at + leeway:
        raise ValidationError(ValidationReason.EXPIRED)


def is_valid(token: Token, data: ValidationData) -> bool:
    try:
        validate(token, data)
    except ValidationError:
        return False
    return True
