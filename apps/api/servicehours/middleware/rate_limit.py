from __future__ import annotations

import hashlib
import time

import structlog
from fastapi import Request
from redis import Redis
from redis.connection import ConnectionPool
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from servicehours.core.config import settings

logger = structlog.get_logger(__name__)

_pool: ConnectionPool | None = None

WINDOWS = {
    "sec": 1,
    "second": 1,
    "seconds": 1,
    "min": 60,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def get_redis() -> Redis:
    global _pool
    if _pool is None:
        _pool = ConnectionPool.from_url(settings.redis_url, decode_responses=True)
    return Redis(connection_pool=_pool)


def parse_rate(rate: str) -> tuple[int, int]:
    """Parse ``"<limit>/<window>"`` such as ``"60/minute"`` into (limit, window_seconds)."""
    raw = rate.strip().lower()
    if "/" not in raw:
        raise ValueError(f"Invalid rate format: {rate}")

    limit_str, window_str = raw.split("/", 1)
    limit = int(limit_str)
    window = WINDOWS.get(window_str.strip())
    if window is None:
        raise ValueError(f"Invalid rate window: {window_str}")
    return limit, window


def _client_key(request: Request) -> str:
    # Authenticated callers are bucketed per token so a shared NAT does not starve them
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        digest = hashlib.sha256(auth.encode("utf-8")).hexdigest()[:16]
        return f"tok:{digest}"
    return f"ip:{request.client.host if request.client else 'unknown'}"


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        if not settings.rate_limit_enabled or request.method == "OPTIONS":
            return await call_next(request)

        path = request.url.path
        if path in set(settings.rate_limit_exempt_paths):
            return await call_next(request)

        try:
            limit, window_seconds = parse_rate(settings.rate_limit_default)
        except ValueError:
            logger.warning("rate_limit_misconfigured", rate=settings.rate_limit_default)
            return await call_next(request)

        now = int(time.time())
        bucket = now // window_seconds
        key = f"rl:{_client_key(request)}:{request.method}:{path}:{window_seconds}:{bucket}"

        try:
            r = get_redis()
            count = r.incr(key)
            if count == 1:
                r.expire(key, window_seconds)
        except RedisError:
            # Redis down: serve the request unthrottled
            logger.warning("rate_limit_unavailable")
            return await call_next(request)

        remaining = max(0, limit - int(count))
        reset = (bucket + 1) * window_seconds

        if count > limit:
            return JSONResponse(
                status_code=429,
                content={"detail": "rate limit exceeded"},
                headers={
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(reset),
                    "Retry-After": str(max(0, reset - now)),
                },
            )

        response = await call_next(request)
        response.headers.setdefault("X-RateLimit-Limit", str(limit))
        response.headers.setdefault("X-RateLimit-Remaining", str(remaining))
        response.headers.setdefault("X-RateLimit-Reset", str(reset))
        return response
