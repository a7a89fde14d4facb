"""Request logging middleware.

Assigns each request a short id (honouring an incoming X-Request-ID),
stores it on request.state for ApiResponse, echoes it back in the
response header and logs one line per request:

    INFO POST /api/v1/staking/claim 200 4ms client=10.0.0.7 req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("mr.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %d %.0fms client=%s %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client,
            request_id,
        )
        return response
