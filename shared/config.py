"""
Shared configuration management for the Passport token service.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AlgorithmSettings(BaseModel):
    """Signing algorithm selection: family plus hash variant."""

    type: str = "hmac"
    sha: str = "Sha256"


class HmacKeySettings(BaseModel):
    """Shared secret for the hmac family."""

    model_config = ConfigDict(populate_by_name=True)

    # The configuration key is spelled "secrect" in deployed config files.
    secret: str = Field(default="", alias="secrect")


class KeyFileSettings(BaseModel):
    """PEM key file references."""

    private_key: str = ""
    public_key: str = ""


class AsymmetricKeySettings(KeyFileSettings):
    """PEM key files with an optional base64-encoded private key passphrase."""

    passphrase: Optional[str] = None


class SignerSettings(BaseModel):
    """Algorithm and key material used to sign and verify tokens."""

    algorithm: AlgorithmSettings = Field(default_factory=AlgorithmSettings)
    hmac: HmacKeySettings = Field(default_factory=HmacKeySettings)
    rsa: AsymmetricKeySettings = Field(default_factory=AsymmetricKeySettings)
    ecdsa: AsymmetricKeySettings = Field(default_factory=AsymmetricKeySettings)
    eddsa: KeyFileSettings = Field(default_factory=KeyFileSettings)


class PassportSettings(BaseSettings):
    """Passport service configuration.

    Values load from the environment with the ``PASSPORT_`` prefix; nested
    signer fields use ``__`` as delimiter, e.g.
    ``PASSPORT_SIGNER__ALGORITHM__TYPE=rsa``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PASSPORT_",
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Claims
    issuer: str = "passport"
    audience: str = "passport-admin"
    subject: str = "passport"
    access_token_id: str = "passport-access-token"
    refresh_token_id: str = "passport-refresh-token"

    # Lifetimes (seconds)
    access_expires_in: int = 3600
    refresh_expires_in: int = 604800
    not_before: int = 0
    leeway: int = 0

    # Base64-encoded key for encrypted claims
    passphrase: str = ""

    signer: SignerSettings = Field(default_factory=SignerSettings)

    # Revocation store
    redis_url: str = "redis://localhost:6379/0"
    revocation_prefix: str = "passport:revoked:"
    redis_timeout: float = 5.0


def get_settings(**overrides) -> PassportSettings:
    """Load Passport settings, applying explicit overrides on top of the environment."""
    return PassportSettings(**overrides)
