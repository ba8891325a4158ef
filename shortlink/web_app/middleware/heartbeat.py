"""Liveness endpoint middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from typing import Callable


class HeartbeatMiddleware(BaseHTTPMiddleware):
    """Answer liveness probes before any other middleware runs."""

    def __init__(self, app, path: str = "/ping"):
        super().__init__(app)
        self.path = path

    async def dispatch(self, request: Request, call_next: Callable):
        if request.method in ("GET", "HEAD") and request.url.path == self.path:
            return PlainTextResponse(".", status_code=200)
        return await call_next(request)
