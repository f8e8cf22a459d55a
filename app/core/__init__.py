"""Core: config, rate limiting, and application bootstrap."""

from app.core.config import get_settings

__all__ = ["get_settings"]
