"""Default content type middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable


JSON_CONTENT_TYPE = "application/json"


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """Mark responses that carry no content type as JSON."""

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)
        if "content-type" not in response.headers:
            response.headers["Content-Type"] = JSON_CONTENT_TYPE
        return response
