"""
Per-IP rate limiting.

In-process sliding window: each client IP may make `limit` requests per
`window` seconds. Limiters live on app.state so every app instance (and
every test client) starts with a clean slate.
"""

import time
from collections import defaultdict, deque
from typing import Callable, Optional

from fastapi import Request

from shared.exceptions import RateLimitError


class SlidingWindowRateLimiter:
    """Remembers request timestamps per key within the window."""

    def __init__(
        self,
        limit: int,
        window: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._last_sweep: Optional[float] = None

    def hit(self, key: str) -> Optional[int]:
        """
        Record a request.

        Returns:
            None if allowed, otherwise seconds until the oldest request
            leaves the window
        """
        if self.limit <= 0:
            return None

        now = self._clock()
        if self._last_sweep is None or now - self._last_sweep >= self.window:
            self._sweep(now)
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window:
            hits.popleft()

        if len(hits) >= self.limit:
            return max(1, int(hits[0] + self.window - now))

        hits.append(now)
        return None

    def _sweep(self, now: float) -> None:
        """Drop expired timestamps, and keys left with none."""
        self._last_sweep = now
        cutoff = now - self.window
        for key in list(self._hits):
            hits = self._hits[key]
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if not hits:
                del self._hits[key]

    def __len__(self) -> int:
        return len(self._hits)

    def reset(self) -> None:
        self._hits.clear()


def client_ip(request: Request, trusted_hops: int = 1) -> str:
    """
    Address of the client as seen by the outermost trusted proxy.

    Each proxy appends the peer it received the request from, so with
    `trusted_hops` proxies in front of the API the client is the entry that
    many places from the end. Entries further left are client-supplied.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and trusted_hops > 0:
        entries = [entry.strip() for entry in forwarded.split(",") if entry.strip()]
        if entries:
            return entries[-min(trusted_hops, len(entries))]
    if request.client:
        return request.client.host
    return "unknown"


def rate_limit(limiter_name: str):
    """Dependency factory enforcing the limiter stored at app.state.<limiter_name>."""

    async def dependency(request: Request) -> None:
        limiter: Optional[SlidingWindowRateLimiter] = getattr(
            request.app.state, limiter_name, None
        )
        if limiter is None:
            return
        settings = getattr(request.app.state, "settings", None)
        hops = settings.trusted_proxy_hops if settings is not None else 1
        retry_after = limiter.hit(client_ip(request, hops))
        if retry_after is not None:
            raise RateLimitError(
                "Too many requests from this IP, please try again later.",
                retry_after=retry_after,
            )

    return dependency


api_rate_limit = rate_limit("api_rate_limiter")
auth_rate_limit = rate_limit("auth_rate_limiter")
