"""Request context management using contextvars.

Provides async-safe storage for request-scoped identifiers (request id and
correlation id) so log records emitted deep in services can carry them.

Usage:
    set_request_context(request_id="abc", correlation_id="xyz")
"""

import logging
from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_request_context(
    request_id: str | None, correlation_id: str | None = None
) -> None:
    """Set request and correlation ids for the current async task."""
    _request_id.set(request_id)
    _correlation_id.set(correlation_id or request_id)


def clear_request_context() -> None:
    """Reset request identifiers (end of request)."""
    _request_id.set(None)
    _correlation_id.set(None)


class RequestContextLogFilter(logging.Filter):
    """Attach request_id and correlation_id attributes to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        record.correlation_id = _correlation_id.get() or "-"
        return True
