"""Recovery middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from ..errors import internal_error_response


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Turn any exception escaping a handler into a generic 500."""

    async def dispatch(self, request: Request, call_next: Callable):
        try:
            return await call_next(request)
        except Exception as e:
            return internal_error_response(request, e)
