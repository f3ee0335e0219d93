"""
Car Tinder Backend — Request Context Middleware
=================================================

What:  Gives every request an ID and a small record of the store calls it
       made, then writes one access line per request.
Why:   Each endpoint is a single store call, so "which statement ran and how
       did it end" is the most useful thing an access line can say:

           POST /testdrive -> 400 in 4.2ms store=[book_test_drive:conflict]

How:   RequestContext lives in a ContextVar. CarStore appends
       "<operation>:<outcome>" to it; RequestIDLogFilter copies the request ID
       onto every log record so the format string can print %(request_id)s.

Outcomes recorded by CarStore: ok, conflict, error, timeout.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

access_logger = logging.getLogger("cartinder.access")

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass
class RequestContext:
    request_id: str
    store_calls: List[str] = field(default_factory=list)


# Set per request by the middleware; the store appends to the same object
# from inside call_next, so the notes are still there when it returns.
request_context_var: ContextVar[Optional[RequestContext]] = ContextVar(
    "request_context", default=None
)


def current_request_id() -> str:
    ctx = request_context_var.get()
    return ctx.request_id if ctx else "-"


def record_store_call(operation: str, outcome: str) -> None:
    """Note a finished store call on the current request (no-op outside one)."""
    ctx = request_context_var.get()
    if ctx is not None:
        ctx.store_calls.append(f"{operation}:{outcome}")


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every record passing through the handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        return True


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the client, or generate a 12-char hex ID
        2. Install a RequestContext for the request
        3. Echo the ID back in X-Request-ID
        4. Log method, path, status, duration and store calls at
           ERROR for 5xx, WARNING for 4xx, INFO otherwise

    GET /health is not access-logged; monitors call it every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        ctx = RequestContext(
            request_id=request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        )
        token = request_context_var.set(ctx)
        request.state.request_id = ctx.request_id

        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000

            response.headers[REQUEST_ID_HEADER] = ctx.request_id
            if request.url.path != "/health":
                self._log(request, response.status_code, elapsed_ms, ctx)
            return response
        finally:
            request_context_var.reset(token)

    @staticmethod
    def _log(request: Request, status: int, elapsed_ms: float, ctx: RequestContext) -> None:
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        access_logger.log(
            level,
            "%s %s -> %d in %.1fms store=[%s]",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            ",".join(ctx.store_calls),
        )
