"""
Revocation store contract and the in-process implementation.

Entries are keyed by a digest of the raw token string, never by decoded
claims, so even a token that no longer parses can be matched. An entry that
exists and has not expired means "revoked".
"""

from __future__ import annotations

import hashlib
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from shared.logging import get_logger


def token_hash(raw_token: str) -> str:
    """SHA-256 hex digest of the raw token string."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class RevocationStore(Protocol):
    """Keyed TTL store of revoked token hashes."""

    async def is_revoked(self, token_hash: str) -> bool:
        ...

    async def revoke(self, token_hash: str, ttl_seconds: int) -> bool:
        """Record ``token_hash`` for ``ttl_seconds``.

        Returns ``True`` when the entry was created and ``False`` when it was
        already present; both count as success.
        """
        ...


@dataclass(frozen=True)
class RevocationEntry:
    revoked_at: float
    expires_at: float


class MemoryRevocationStore:
    """Process-local revocation store.

    A lock guards the mapping, so threads and event-loop tasks may share one
    instance. Expired entries are dropped lazily on access and by ``purge``.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, RevocationEntry] = {}
        self._lock = threading.Lock()
        self.logger = get_logger("passport.revocation.memory")

    def _live_entry(self, token_hash: str, now: float) -> Optional[RevocationEntry]:
        entry = self._entries.get(token_hash)
        if entry is not None and entry.expires_at <= now:
            del self._entries[token_hash]
            return None
        return entry

    async def is_revoked(self, token_hash: str) -> bool:
        with self._lock:
            return self._live_entry(token_hash, self._clock()) is not None

    async def revoke(self, token_hash: str, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        with self._lock:
            now = self._clock()
            if self._live_entry(token_hash, now) is not None:
                return False
            self._entries[token_hash] = RevocationEntry(revoked_at=now, expires_at=now + ttl_seconds)

        self.logger.info("Token revoked", token_hash=token_hash[:12], ttl=ttl_seconds)
        return True

    async def revoked_at(self, token_hash: str) -> Optional[float]:
        with self._lock:
            entry = self._live_entry(token_hash, self._clock())
            return entry.revoked_at if entry else None

    def purge(self) -> int:
        """Drop expired entries; returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
