"""Request context middleware.

Generates or forwards X-Request-ID and X-Correlation-ID, stores both in
contextvars for log records and echoes them on the response.
Client-provided values are sanitized (length + character set) to prevent log injection.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming.
"""

import re
import uuid
from typing import Callable

from app.shared.context import clear_request_context, set_request_context

# Safe for logging: alphanumeric, hyphen, underscore; max length to avoid abuse.
HEADER_ID_MAX_LENGTH = 64
HEADER_ID_ALLOWED_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(HEADER_ID_MAX_LENGTH) + r"}$"
)


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def sanitize_header_id(raw: str | None) -> str | None:
    """Return the stripped value if safe for logging, else None."""
    if not raw:
        return None
    value = raw.strip()
    if not HEADER_ID_ALLOWED_PATTERN.match(value):
        return None
    return value


def RequestContextMiddleware(
    app: Callable,
    request_id_header: str = "X-Request-ID",
    correlation_id_header: str = "X-Correlation-ID",
) -> Callable:
    """Attach request and correlation ids to scope state, contextvars and response headers. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = sanitize_header_id(_get_header(scope, request_id_header)) or str(
            uuid.uuid4()
        )
        correlation_id = (
            sanitize_header_id(_get_header(scope, correlation_id_header)) or request_id
        )
        state = scope.setdefault("state", {})
        state["request_id"] = request_id
        state["correlation_id"] = correlation_id

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((request_id_header.encode(), request_id.encode()))
                headers.append((correlation_id_header.encode(), correlation_id.encode()))
                message["headers"] = headers
            await send(message)

        set_request_context(request_id, correlation_id)
        try:
            await app(scope, receive, send_wrapper)
        finally:
            clear_request_context()

    return asgi_app
