"""Error responders for the short link web app.

Every failure that is not the client's fault is answered with the same
generic 500 body; the real cause only goes to the server log.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.common.logging_config import get_logger
from lib.exceptions import InvalidURLError, ShortLinkError


INTERNAL_ERROR_DETAIL = "Internal Server Error"


def _logger_for(request: Request):
    return getattr(request.app.state, "logger", None) or get_logger("web")


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an error server-side and answer with a generic 500."""
    request_id = getattr(request.state, "request_id", "-")
    _logger_for(request).error(
        f"Handling error: {request.method} {request.url.path} "
        f"(request id {request_id}): {exc!r}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_DETAIL},
    )


async def handle_service_error(request: Request, exc: ShortLinkError) -> JSONResponse:
    """Map service exceptions to responses."""
    if isinstance(exc, InvalidURLError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )
    return internal_error_response(request, exc)


def describe_validation_error(exc: RequestValidationError) -> str:
    """Build a readable message from request validation errors."""
    messages = []
    for error in exc.errors():
        cause = (error.get("ctx") or {}).get("error")
        if cause is not None:
            messages.append(str(cause))
            continue

        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if error.get("type") == "json_invalid" or not field:
            messages.append("invalid request body")
        else:
            messages.append(f"{field}: {error.get('msg', 'invalid value')}")

    return "; ".join(dict.fromkeys(messages)) or "invalid request body"


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed request bodies and parameters with a 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": describe_validation_error(exc)},
    )
