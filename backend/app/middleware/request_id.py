"""
Cash Card Service — Request ID Middleware
===========================================

What:  Tags every request with a correlation ID and echoes it in the response.
Why:   Error bodies carry `request_id`, so a client reporting a 500 can be
       matched to the server-side log lines of that exact request.
How:   Reuses a well-formed client `X-Request-ID`, otherwise generates one;
       stores it in a ContextVar for handlers and loggers.
When:  Outermost middleware (runs before logging and routing).
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs end up in logs; accept only short token-like values
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """Short random ID; 8 hex chars is plenty for log correlation."""
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request ID for tracing.

    Behavior:
        1. Use the client's X-Request-ID if it matches the allowed format
        2. Otherwise generate a new one
        3. Store it in request_id_var and request.state.request_id
        4. Return it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get(REQUEST_ID_HEADER, "")
        rid = supplied if _VALID_REQUEST_ID.match(supplied) else new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
