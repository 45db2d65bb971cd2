"""
Request ID middleware for correlating log lines that belong to one request.

The ID lives in a context variable so concurrent requests never see each
other's value, and RequestIDFilter copies it onto every log record.
"""

import uuid
import logging
from contextvars import ContextVar
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns each request an ID.

    1. Reuse the client's X-Request-ID header, or generate a UUID
    2. Store it in request.state and in the logging context
    3. Echo it back on the response
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = _request_id.set(request_id)

        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _request_id.reset(token)


class RequestIDFilter(logging.Filter):
    """Attach the current request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = _request_id.get()
        return True


def get_request_id(request: Request) -> str:
    """
    Return the request ID stored on the request, or "no-request-id" when the
    middleware did not run (e.g. an error raised before dispatch).
    """
    return getattr(request.state, "request_id", "no-request-id")
