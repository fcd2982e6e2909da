"""Request ID middleware — unique ID per request for tracing.

Learn: Every request gets a UUID, either from the incoming
X-Request-ID header (for distributed tracing) or auto-generated.
A client-supplied value is only trusted if it parses as a UUID;
anything else is replaced, so arbitrary client text never reaches
logs or response headers.
The ID is bound to structlog's contextvars so it appears in all
log entries for that request, kept on request.state for the error
handlers, and returned in the response header.
One "request.completed" line is logged per request.
"""

import time
import uuid
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

# Longest accepted form is the 45-char "urn:uuid:..." spelling.
MAX_REQUEST_ID_LENGTH = 45


def parse_request_id(raw: Optional[str]) -> Optional[str]:
    """Return the canonical UUID string for `raw`, or None if it isn't one."""
    if not raw or len(raw) > MAX_REQUEST_ID_LENGTH:
        return None
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        return None


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Generate and propagate a unique request ID."""

    async def dispatch(self, request: Request, call_next) -> Response:
        # Use the incoming request ID if it is a UUID, else generate one
        request_id = parse_request_id(request.headers.get("X-Request-ID")) or str(uuid.uuid4())
        request.state.request_id = request_id

        # Bind to structlog for correlated logging
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response: Response = await call_next(request)
        logger.info(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        response.headers["X-Request-ID"] = request_id
        return response
