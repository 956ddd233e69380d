"""Request logging middleware."""

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Configure logger
logger = logging.getLogger("lifecalendar.api")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses.

    Logs the method, path, status and duration of every request, and
    tags each one with a server-generated X-Request-ID header. Query
    strings are not logged: the embed route carries the whole
    configuration in them.
    """

    def __init__(self, app, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or ["/health"]

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request with logging."""
        if any(request.url.path.startswith(p) for p in self.exclude_paths):
            return await call_next(request)

        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id

        start_time = time.time()
        method = request.method
        path = request.url.path

        logger.info(f"[{request_id}] {method} {path} - Client: {self._get_client_ip(request)}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] {method} {path} - ERROR - {duration:.2f}ms - {str(e)}"
            )
            raise

        duration = (time.time() - start_time) * 1000

        status = response.status_code
        log_level = logging.INFO if status < 400 else logging.WARNING if status < 500 else logging.ERROR

        logger.log(
            log_level,
            f"[{request_id}] {method} {path} - {status} - {duration:.2f}ms"
        )

        response.headers["X-Request-ID"] = request_id

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request."""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        return request.client.host if request.client else "unknown"
