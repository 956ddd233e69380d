"""API middleware for Life Calendar."""

from lifecalendar.api.middleware.logging import LoggingMiddleware

__all__ = [
    "LoggingMiddleware",
]
