"""
Immutable token builder.

Every ``with_*`` call returns a new builder, so one configured builder can be
shared between concurrent encode calls without leaking state between them.
Nothing is encoded or validated here.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional

DEFAULT_EXPIRES_IN = 3600


def _merge(current: Mapping[str, Any], name: Any, value: Any) -> Mapping[str, Any]:
    """Apply ``name=value`` or, when ``name`` is a mapping, each of its items."""
    merged = dict(current)
    if isinstance(name, Mapping):
        for key, item in name.items():
            merged[str(key)] = item
    elif isinstance(name, (str, int)) and not isinstance(name, bool):
        merged[str(name)] = value
    else:
        raise TypeError(f"Expected a name or a mapping, got {type(name).__name__}")
    return MappingProxyType(merged)


@dataclass(frozen=True)
class TokenBuilder:
    """Accumulated token metadata: registered claims, custom headers and claims,
    claims to encrypt, timing offsets and validation leeway."""

    issuer: Optional[str] = None
    audience: Optional[str] = None
    subject: Optional[str] = None
    jti: Optional[str] = None
    expires_in: int = DEFAULT_EXPIRES_IN
    not_before: int = 0
    leeway: int = 0
    passphrase: str = field(default="", repr=False)
    headers: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    claims: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), repr=False)

    def with_header(self, name: Any, value: Any = None) -> "TokenBuilder":
        return replace(self, headers=_merge(self.headers, name, value))

    def with_claim(self, name: Any, value: Any = None) -> "TokenBuilder":
        return replace(self, claims=_merge(self.claims, name, value))

    def with_data(self, name: Any, value: Any = None) -> "TokenBuilder":
        """Add claims whose values are encrypted with the passphrase at encode time.

        Empty names and empty values are skipped.
        """
        if isinstance(name, Mapping):
            builder = self
            for key, item in name.items():
                builder = builder.with_data(key, item)
            return builder
        if not name or value is None or value == "":
            return self
        return replace(self, data=_merge(self.data, name, value))

    def with_iss(self, issuer: str) -> "TokenBuilder":
        return replace(self, issuer=issuer)

    def with_aud(self, audience: str) -> "TokenBuilder":
        return replace(self, audience=audience)

    def with_sub(self, subject: str) -> "TokenBuilder":
        return replace(self, subject=subject)

    def with_jti(self, jti: str) -> "TokenBuilder":
        return replace(self, jti=jti)

    def with_exp(self, seconds: int) -> "TokenBuilder":
        return replace(self, expires_in=int(seconds))

    def with_nbf(self, seconds: int) -> "TokenBuilder":
        # A not-before offset never points into the past.
        return replace(self, not_before=max(0, int(seconds)))

    def with_leeway(self, seconds: int) -> "TokenBuilder":
        return replace(self, leeway=int(seconds))

    def with_passphrase(self, passphrase: str) -> "TokenBuilder":
        return replace(self, passphrase=passphrase or "")
