"""
Revocation ("blacklist") package.

Stores digests of revoked refresh tokens with a TTL equal to the token's
lifetime, so entries disappear once the token would have expired anyway.
A Redis store serves multi-worker deployments; the memory store serves a
single process and tests.
"""

from .redis_store import RedisRevocationStore
from .store import MemoryRevocationStore, RevocationEntry, RevocationStore, token_hash

__all__ = [
    "MemoryRevocationStore",
    "RedisRevocationStore",
    "RevocationEntry",
    "RevocationStore",
    "token_hash",
]
