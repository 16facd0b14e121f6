"""
Passport service: admin access/refresh tokens and the logout workflow.

The admin id travels encrypted in the ``adminid`` claim. Access and refresh
tokens share issuer, audience and subject and are told apart by their token
id (``jti``), which validation compares against the configured value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from shared.config import PassportSettings
from shared.errors import SignatureError, ValidationError, ValidationReason
from shared.logging import get_logger

from .revocation import RevocationStore, token_hash
from .tokens import Token, TokenBuilder, TokenEngine, ValidationData

ADMIN_ID_CLAIM = "adminid"


class TokenStatus(str, Enum):
    """Operational status of a refresh token.

    ``unknown -> valid -> revoked | expired``; both terminal states reject reuse.
    """
    UNKNOWN = "unknown"
    VALID = "valid"
    REVOKED = "revoked"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int
    refresh_expires_in: int
    token_type: str = "Bearer"


@dataclass(frozen=True)
class LogoutResult:
    """Outcome of a logout. ``already_revoked`` marks the no-op case."""

    already_revoked: bool
    admin_id: Optional[Any] = None
    ttl_seconds: Optional[int] = None


class PassportService:
    """Issues, checks and revokes admin passport tokens."""

    def __init__(self, engine: TokenEngine, store: RevocationStore, settings: PassportSettings):
        self.engine = engine
        self.store = store
        self.settings = settings
        self.logger = get_logger("passport.service")

    @classmethod
    def from_settings(cls, settings: PassportSettings, store: RevocationStore) -> "PassportService":
        engine = TokenEngine(settings.signer, passphrase=settings.passphrase)
        return cls(engine, store, settings)

    def _builder(self, token_id: str, expires_in: int) -> TokenBuilder:
        return (
            self.engine.builder()
            .with_iss(self.settings.issuer)
            .with_aud(self.settings.audience)
            .with_sub(self.settings.subject)
            .with_jti(token_id)
            .with_exp(expires_in)
            .with_nbf(self.settings.not_before)
            .with_leeway(self.settings.leeway)
        )

    def _expected(self, token_id: str) -> ValidationData:
        return ValidationData(
            issuer=self.settings.issuer,
            audience=self.settings.audience,
            subject=self.settings.subject,
            jti=token_id,
            leeway=self.settings.leeway,
        )

    def create_access_token(self, admin_id: Any) -> str:
        builder = self._builder(self.settings.access_token_id, self.settings.access_expires_in)
        return self.engine.encode(builder.with_data(ADMIN_ID_CLAIM, admin_id))

    def create_refresh_token(self, admin_id: Any) -> str:
        builder = self._builder(self.settings.refresh_token_id, self.settings.refresh_expires_in)
        return self.engine.encode(builder.with_data(ADMIN_ID_CLAIM, admin_id))

    def issue_tokens(self, admin_id: Any) -> TokenPair:
        """Issue an access/refresh token pair for ``admin_id``."""
        pair = TokenPair(
            access_token=self.create_access_token(admin_id),
            refresh_token=self.create_refresh_token(admin_id),
            expires_in=self.settings.access_expires_in,
            refresh_expires_in=self.settings.refresh_expires_in,
        )
        self.logger.info("Issued passport tokens")
        return pair

    def _decode_checked(self, raw: str, token_id: str) -> Token:
        """decode -> validate -> verify; any failure raises."""
        token = self.engine.decode(raw)
        self.engine.validate(token, self._expected(token_id))
        if not self.engine.verify(token):
            raise SignatureError("Token signature is invalid")
        return token

    def decode_access_token(self, raw: str) -> Token:
        return self._decode_checked(raw, self.settings.access_token_id)

    def decode_refresh_token(self, raw: str) -> Token:
        return self._decode_checked(raw, self.settings.refresh_token_id)

    def admin_id(self, token: Token) -> Any:
        return self.engine.get_data(token, ADMIN_ID_CLAIM)

    async def is_revoked(self, raw: str) -> bool:
        return await self.store.is_revoked(token_hash(raw))

    async def refresh_token_status(self, raw: str) -> TokenStatus:
        """Report whether a refresh token is valid, revoked or expired.

        Other failures (parse, identity mismatch, signature, store) raise.
        """
        if await self.is_revoked(raw):
            return TokenStatus.REVOKED

        token = self.engine.decode(raw)
        try:
            self.engine.validate(token, self._expected(self.settings.refresh_token_id))
        except ValidationError as e:
            if e.reason == ValidationReason.EXPIRED:
                return TokenStatus.EXPIRED
            raise

        if not self.engine.verify(token):
            raise SignatureError("Token signature is invalid")
        return TokenStatus.VALID

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Issue a new access token from a live refresh token."""
        if await self.is_revoked(refresh_token):
            raise ValidationError(ValidationReason.EXPIRED, "Refresh token has been revoked")

        token = self.decode_refresh_token(refresh_token)
        access_token = self.create_access_token(self.admin_id(token))
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self.settings.access_expires_in,
            refresh_expires_in=max(0, int(token.get_claim("exp")) - self.engine.now()),
        )

    async def logout(self, refresh_token: str) -> LogoutResult:
        """Revoke ``refresh_token`` for the rest of its lifetime.

        The token must decode, validate and verify before anything is written,
        so unauthenticated input never reaches the store.
        """
        digest = token_hash(refresh_token)
        if await self.store.is_revoked(digest):
            return LogoutResult(already_revoked=True)

        token = self.decode_refresh_token(refresh_token)
        admin_id = self.admin_id(token)

        issued_at = token.get_claim("iat")
        expires_at = token.get_claim("exp")
        if not isinstance(issued_at, int) or not isinstance(expires_at, int) or expires_at <= issued_at:
            raise ValidationError(ValidationReason.EXPIRED, "Refresh token lifetime is invalid")
        ttl = expires_at - issued_at

        created = await self.store.revoke(digest, ttl)
        self.logger.info("Refresh token revoked", token_hash=digest[:12], ttl=ttl, created=created)
        return LogoutResult(already_revoked=not created, admin_id=admin_id, ttl_seconds=ttl)
