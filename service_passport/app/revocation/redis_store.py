"""
Redis-backed revocation store.
"""

import time
from typing import Any, Callable, Optional

import redis.asyncio as redis

from shared.circuit_breaker import CircuitBreaker
from shared.errors import RevocationError
from shared.logging import get_logger


class RedisRevocationStore:
    """Revocation store shared by every worker through Redis.

    ``SET key value NX EX ttl`` creates an entry only when absent, so
    concurrent revocations of one token race safely and Redis expires the
    entry on its own. Every backend failure surfaces as
    :class:`RevocationError`; callers treat it as "not verifiably live".
    """

    def __init__(
        self,
        redis_url: str,
        *,
        prefix: str = "passport:revoked:",
        timeout: float = 5.0,
        client: Optional[redis.Redis] = None,
        circuit_breaker: Optional[CircuitBreaker] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.redis_url = redis_url
        self.prefix = prefix
        self.timeout = timeout
        self.logger = get_logger("passport.revocation.redis")
        self._redis = client
        self._clock = clock
        self.circuit_breaker = circuit_breaker or CircuitBreaker("revocation-redis")

    def _get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=self.timeout,
                socket_timeout=self.timeout,
                retry_on_timeout=True,
                health_check_interval=30
            )
        return self._redis

    def _make_key(self, token_hash: str) -> str:
        return f"{self.prefix}{token_hash}"

    async def _call(self, operation: str, func: Callable[..., Any], *args, **kwargs) -> Any:
        try:
            return await self.circuit_breaker.call(func, *args, **kwargs)
        except Exception as e:
            self.logger.error("Revocation store call failed", operation=operation, error=str(e))
            raise RevocationError(details={"operation": operation}) from None

    async def start(self) -> None:
        """Open the connection and check that Redis answers."""
        await self._call("ping", self._get_redis().ping)
        self.logger.info("Redis revocation store started")

    async def stop(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            self.logger.info("Redis revocation store stopped")

    async def is_revoked(self, token_hash: str) -> bool:
        count = await self._call("exists", self._get_redis().exists, self._make_key(token_hash))
        return bool(count)

    async def revoke(self, token_hash: str, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        created = await self._call(
            "set",
            self._get_redis().set,
            self._make_key(token_hash),
            str(int(self._clock())),
            nx=True,
            ex=int(ttl_seconds),
        )
        if created:
            self.logger.info("Token revoked", token_hash=token_hash[:12], ttl=ttl_seconds)
        return bool(created)

    async def health_check(self) -> bool:
        """Check Redis health."""
        try:
            await self._call("ping", self._get_redis().ping)
            return True
        except RevocationError:
            return False
