"""Per-client fixed-window rate limiting for the API routes."""

import logging
import time
from typing import Callable, Dict, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.exceptions import RateLimitError

logger = logging.getLogger(__name__)


class RateLimiter:
    """Counts requests per key inside a fixed time window."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        # key -> (window start, requests seen)
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._last_sweep = clock()

    @property
    def limit(self) -> int:
        return self._limit

    def check(self, key: str) -> Tuple[bool, int]:
        """Record a request for ``key``.

        Returns:
            Tuple of (allowed, remaining requests in the current window).
        """
        now = self._clock()
        if now - self._last_sweep >= self._window:
            self._sweep(now)

        started, count = self._windows.get(key, (now, 0))
        if now - started >= self._window:
            started, count = now, 0

        if count >= self._limit:
            return False, 0

        count += 1
        self._windows[key] = (started, count)
        return True, self._limit - count

    def __len__(self) -> int:
        return len(self._windows)

    def _sweep(self, now: float) -> None:
        """Drop every key whose window has ended."""
        expired = [
            key
            for key, (started, _) in self._windows.items()
            if now - started >= self._window
        ]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects ``/api`` requests over the configured cap with 429."""

    def __init__(self, app, limiter: RateLimiter, path_prefix: str = "/api"):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        allowed, remaining = self.limiter.check(client)
        if not allowed:
            logger.info("Rate limit exceeded for %s", client)
            error = RateLimitError()
            return JSONResponse(status_code=error.status_code, content=error.to_dict())

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limiter.limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
