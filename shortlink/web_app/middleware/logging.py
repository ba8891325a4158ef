"""Logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from lib.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    def __init__(self, app, logger: logging.Logger = None):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        """Log request and response."""
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        # Request id and client IP are filled in by the inner middleware
        request_id = getattr(request.state, "request_id", "-")
        client_ip = getattr(request.state, "client_ip", None)
        if client_ip is None:
            client_ip = request.client.host if request.client else "unknown"

        self.logger.info(
            f"{request.method} {request.url.path} - Status: {response.status_code} - "
            f"Duration: {duration_ms:.2f}ms - Client: {client_ip} - Request ID: {request_id}"
        )

        return response
