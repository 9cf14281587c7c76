"""Fixed-window rate limiting backed by Redis.

Only write endpoints that move money or credentials are limited:
  - auth:  POST /api/v1/auth/*   (anti brute-force)
  - bets:  POST /api/v1/bets     (anti spam)

Key pattern: "ratelimit:{client_ip}:{group}:{window}", counted with
INCR + EXPIRE. The client IP honours the first X-Forwarded-For hop.

If Redis is unreachable the request is let through with a warning.

Errors raised inside BaseHTTPMiddleware bypass the app exception handlers,
so the 429 envelope is rendered here directly.
"""

import logging
import time

from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from config.settings import settings
from src.uni_common.errors import RateLimitError
from src.uni_common.redis_client import count_in_window
from src.uni_common.response import error_response

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60


def endpoint_group(method: str, path: str) -> str | None:
    """Return the rate-limit group for a request, or None if unlimited."""
    if method != "POST":
        return None
    if path.startswith("/api/v1/auth/"):
        return "auth"
    if path.rstrip("/") == "/api/v1/bets":
        return "bets"
    return None


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        limit_per_minute: int | None = None,
        enabled: bool | None = None,
    ) -> None:
        super().__init__(app)
        self._limit = limit_per_minute or settings.RATE_LIMIT_PER_MINUTE
        self._enabled = settings.RATE_LIMIT_ENABLED if enabled is None else enabled

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        group = endpoint_group(request.method, request.url.path)
        if not self._enabled or group is None:
            return await call_next(request)

        window = int(time.time()) // _WINDOW_SECONDS
        key = f"ratelimit:{client_ip(request)}:{group}:{window}"
        try:
            count = await count_in_window(key, _WINDOW_SECONDS)
        except RedisError as exc:
            # Fail open: throttling is lost, trading is not
            logger.warning("Rate limiter unavailable, allowing %s: %s", key, exc)
            return await call_next(request)

        if count > self._limit:
            logger.warning("Rate limit hit: key=%s count=%d", key, count)
            err = RateLimitError()
            return JSONResponse(
                status_code=err.http_status,
                content=error_response(err.code, err.message, request).model_dump(),
                headers={"Retry-After": str(_WINDOW_SECONDS)},
            )
        return await call_next(request)
