"""Client IP resolution middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from lib.common.headers import resolve_client_ip


class RealIPMiddleware(BaseHTTPMiddleware):
    """Resolve the originating client IP from proxy headers."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Store the resolved client IP in request state."""
        peer_host = request.client.host if request.client else None
        request.state.client_ip = resolve_client_ip(dict(request.headers), peer_host)

        response = await call_next(request)
        return response
