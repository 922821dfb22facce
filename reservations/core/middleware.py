"""Request tracing middleware."""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log how long it took.

    A caller-supplied ``X-Request-ID`` is echoed back; otherwise a new one
    is generated. Requests slower than ``slow_after`` seconds are logged as
    warnings.
    """

    def __init__(self, app, slow_after: float = SLOW_REQUEST_SECONDS):
        super().__init__(app)
        self.slow_after = slow_after

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed:.3f}s"

        summary = f"{request.method} {request.url.path} {response.status_code} {elapsed:.3f}s [{request_id}]"
        if elapsed > self.slow_after:
            logger.warning(f"Slow request: {summary}")
        else:
            logger.debug(summary)
        return response
