"""Request logging middleware.

Assigns each request an id (reusing a well-formed incoming ``X-Request-ID``
from a proxy), exposes it on ``request.state`` for the ApiResponse envelope,
echoes it back as a response header and writes one log line per request:

    INFO [POST] /api/v1/bets → 200 (23ms) req_a1b2c3d4e5f6

Server errors are logged at WARNING so they stand out next to the
traceback the store-failure handler emits.
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("unistake.request")

REQUEST_ID_HEADER = "X-Request-ID"
_INCOMING_ID = re.compile(r"^[A-Za-z0-9_\-]{8,64}$")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _INCOMING_ID.match(incoming):
        return incoming
    return f"req_{uuid.uuid4().hex[:12]}"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id,
        )
        return response
