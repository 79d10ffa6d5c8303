"""
hotel_desk.observability.middleware

Request logging middleware.

Binds `request_id`, `method` and `path` into structlog contextvars for the duration
of a request, writes one `request_completed` line, and echoes the request id back in
`x-request-id`.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from hotel_desk.observability.logging import get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        client = request.client.host if request.client else None

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                log.exception("request_failed", client=client)
                raise
            elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
            # Guard redirects are expected traffic; only server errors are warnings.
            emit = log.warning if response.status_code >= 500 else log.info
            emit(
                "request_completed",
                status=response.status_code,
                duration_ms=elapsed_ms,
                client=client,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
