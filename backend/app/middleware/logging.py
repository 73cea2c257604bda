"""
Cash Card Service — Request Logging Middleware
================================================

What:  One access-log line per HTTP request with status and duration.
Why:   Shows which card operations ran, for whom, and how they ended.
How:   Times the downstream call and logs at a level chosen by status code.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Example line:
    GET /cashcards/99 200 3.2ms [a1b2c3d4] user=sarah1 from 127.0.0.1

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, client IP, request ID, Basic username
    ❌ Don't log: request bodies, passwords, the Authorization header itself
"""

import base64
import binascii
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("cashcard.access")

# Probes hit these every few seconds; logging them buries real traffic
QUIET_PATHS = {"/health"}


def basic_auth_username(request: Request) -> str:
    """Username from an HTTP Basic header, or '-' if absent or unreadable."""
    header = request.headers.get("Authorization", "")
    scheme, _, encoded = header.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        return "-"
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return "-"
    username, sep, _ = decoded.partition(":")
    return username if sep and username else "-"


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration and caller for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        user = basic_auth_username(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            user,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "user": user,
            },
        )

        return response
