"""Token bucket admission control for outbound HTTP traffic.

A single limiter instance is shared by every upstream request the process
makes, beacon REST lookups and execution JSON-RPC calls alike, so one budget
governs the total outbound load regardless of target.
"""

from typing import Any

import asyncio

import httpx

from beacon_rewards.helpers.constants import RATE_LIMIT_BURST


class TokenBucketLimiter:
    """Asyncio token bucket with a sustained rate and a small burst.

    Tokens accrue at ``rate`` per second up to ``burst``. Waiters are admitted
    in arrival order. A waiter cancelled before admission consumes no token.

    Example:
        ```python
        limiter = TokenBucketLimiter(rate=5.0)

        async def fetch() -> None:
            await limiter.acquire()
            ...
        ```
    """

    def __init__(self, rate: float, burst: int = RATE_LIMIT_BURST) -> None:
        """Initialize the limiter.

        Args:
            rate: Sustained requests per second
            burst: Bucket capacity

        Raises:
            ValueError: If rate or burst is not positive
        """
        if rate <= 0:
            msg = f"Rate limit must be positive, got {rate}"
            raise ValueError(msg)
        if burst < 1:
            msg = f"Burst must be at least 1, got {burst}"
            raise ValueError(msg)

        self.rate = rate
        self.burst = burst
        self._tokens = float(burst)
        self._updated_at: float | None = None
        self._lock = asyncio.Lock()

    def _refill(self, now: float) -> None:
        if self._updated_at is not None:
            elapsed = now - self._updated_at
            self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._updated_at = now

    async def acquire(self) -> None:
        """Wait until a token is available and take it.

        Raises:
            asyncio.CancelledError: If the waiting task is cancelled
        """
        loop = asyncio.get_running_loop()
        # The lock serialises waiters; it is released on cancellation
        async with self._lock:
            self._refill(loop.time())
            if self._tokens < 1:
                await asyncio.sleep((1 - self._tokens) / self.rate)
                self._refill(loop.time())
            self._tokens -= 1


class RateLimitedTransport(httpx.AsyncHTTPTransport):
    """Async HTTP transport that takes a limiter token before each request."""

    def __init__(
        self, limiter: TokenBucketLimiter, *args: Any, **kwargs: Any
    ) -> None:
        """Initialize the transport.

        Args:
            limiter: Limiter shared with every other upstream client
            *args: Positional arguments for httpx.AsyncHTTPTransport
            **kwargs: Keyword arguments for httpx.AsyncHTTPTransport
        """
        self.limiter = limiter
        super().__init__(*args, **kwargs)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Admit the request through the limiter, then send it unmodified."""
        await self.limiter.acquire()
        return await super().handle_async_request(request)


__all__ = [
    "RateLimitedTransport",
    "TokenBucketLimiter",
]
