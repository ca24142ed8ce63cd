"""
Throttling for the login and registration endpoints.

Each client IP gets a sliding window of recent hit times. State lives in
process memory, so every worker process counts on its own.
"""
import time
import logging
from collections import deque
from typing import Deque, Dict, Tuple

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pharmacy.core.config import settings

logger = logging.getLogger(__name__)

# Seconds between sweeps of idle clients.
SWEEP_INTERVAL = 300


class RateLimiter:
    """At most ``requests`` hits per ``window`` seconds for each client key."""

    def __init__(self, requests: int = 20, window: int = 60):
        self.requests = requests
        self.window = window
        self._hits: Dict[str, Deque[float]] = {}
        self._next_sweep = time.time() + SWEEP_INTERVAL

    def _expire(self, hits: Deque[float], now: float) -> None:
        horizon = now - self.window
        while hits and hits[0] <= horizon:
            hits.popleft()

    def is_allowed(self, client_id: str, now: float | None = None) -> Tuple[bool, int]:
        """Record a hit for ``client_id`` if there is room; returns (allowed, remaining)."""
        if now is None:
            now = time.time()
        if now >= self._next_sweep:
            self._sweep(now)

        hits = self._hits.setdefault(client_id, deque())
        self._expire(hits, now)
        if len(hits) >= self.requests:
            return False, 0

        hits.append(now)
        return True, self.requests - len(hits)

    def _sweep(self, now: float) -> None:
        for key in list(self._hits):
            self._expire(self._hits[key], now)
            if not self._hits[key]:
                del self._hits[key]
        self._next_sweep = now + SWEEP_INTERVAL
        logger.debug(f"Rate limiter tracking {len(self._hits)} clients")


rate_limiter = RateLimiter(
    requests=settings.RATE_LIMIT_REQUESTS,
    window=settings.RATE_LIMIT_WINDOW_SECONDS,
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Throttle requests whose path starts with ``path_prefix`` (the auth routes by default)."""

    def __init__(self, app, limiter: RateLimiter = rate_limiter, path_prefix: str | None = None):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix or f"{settings.API_PREFIX}/auth"

    def _limit_headers(self, remaining: int) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limiter.requests),
            "X-RateLimit-Remaining": str(remaining),
        }

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        ip = request.client.host if request.client else "unknown"
        allowed, remaining = self.limiter.is_allowed(f"ip:{ip}")
        if allowed:
            response = await call_next(request)
            response.headers.update(self._limit_headers(remaining))
            return response

        window = self.limiter.window
        logger.warning(f"Throttled {ip}: {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"message": f"Rate limit exceeded. Try again in {window} seconds."},
            headers={"Retry-After": str(window), **self._limit_headers(0)},
        )
