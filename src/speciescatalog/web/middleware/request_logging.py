"""Structured request logging middleware for FastAPI."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from speciescatalog.utils.auth import get_viewer_id

# Get logger - will be wrapped by structlog
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"


class StructuredRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request with its viewer, status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request details in structured format and echo the request id."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        extra_fields = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if request.url.query:
            extra_fields["query"] = str(request.url.query)
        if request.client:
            extra_fields["client_host"] = request.client.host
        if viewer_id := get_viewer_id(request):
            extra_fields["viewer_id"] = viewer_id

        logger.info(
            f"{request.method} {request.url.path} {response.status_code}", extra=extra_fields
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
