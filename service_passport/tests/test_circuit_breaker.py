"""
Unit tests for CircuitBreaker.
"""

from unittest.mock import AsyncMock

import pytest

from shared.circuit_breaker import CircuitBreaker, CircuitBreakerOpenException, CircuitBreakerState


class TestCircuitBreaker:
    """Test cases for CircuitBreaker."""

    @pytest.fixture
    def breaker(self, clock):
        return CircuitBreaker("test", failure_threshold=2, recovery_timeout=10.0, clock=clock)

    @pytest.mark.asyncio
    async def test_passes_result_through(self, breaker):
        func = AsyncMock(return_value="ok")

        assert await breaker.call(func, 1, key="v") == "ok"
        func.assert_awaited_once_with(1, key="v")
        assert breaker.state == CircuitBreakerState.CLOSED

    @pytest.mark.asyncio
    async def test_opens_after_threshold_and_blocks(self, breaker):
        failing = AsyncMock(side_effect=ConnectionError("down"))

        for _ in range(2):
            with pytest.raises(ConnectionError):
                await breaker.call(failing)

        assert breaker.state == CircuitBreakerState.OPEN
        with pytest.raises(CircuitBreakerOpenException):
            await breaker.call(failing)
        assert failing.await_count == 2

    @pytest.mark.asyncio
    async def test_half_open_probe_closes_on_success(self, breaker, clock):
        failing = AsyncMock(side_effect=ConnectionError("down"))
        for _ in range(2):
            with pytest.raises(ConnectionError):
                await breaker.call(failing)

        clock.advance(10)

        assert await breaker.call(AsyncMock(return_value=True)) is True
        assert breaker.state == CircuitBreakerState.CLOSED
        assert breaker.get_state()["failure_count"] == 0

    @pytest.mark.asyncio
    async def test_half_open_probe_failure_reopens(self, breaker, clock):
        failing = AsyncMock(side_effect=ConnectionError("down"))
        for _ in range(2):
            with pytest.raises(ConnectionError):
                await breaker.call(failing)

        clock.advance(10)
        with pytest.raises(ConnectionError):
            await breaker.call(failing)

        assert breaker.state == CircuitBreakerState.OPEN
