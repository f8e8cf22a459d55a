"""Shared utilities: request context, telemetry (logging), and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import clear_request_context, set_request_context
from app.shared.utils import ensure_utc, seconds_between, utc_now

__all__ = [
    "clear_request_context",
    "set_request_context",
    "ensure_utc",
    "seconds_between",
    "utc_now",
]
