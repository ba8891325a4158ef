"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from lib.exceptions import ShortLinkError
from .api import api_router
from .redirect import redirect_router
from .errors import handle_service_error, handle_validation_error
from .middleware import (
    HeartbeatMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
    RealIPMiddleware,
    RecoveryMiddleware,
    JSONContentTypeMiddleware,
)


def create_app(
    store_instance,
    service_instance,
    config,
    logger=None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Store instance
        service_instance: Service instance
        config: Configuration instance
        logger: Optional logger shared with the middleware and error responders

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="shortlink",
        description="URL shortening and redirect service",
        version="1.0.0",
        docs_url="/manage/docs",
        redoc_url=None,
        openapi_url="/manage/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger

    app.add_exception_handler(ShortLinkError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # Last added runs first: requests pass heartbeat, logging, request id,
    # real IP, recovery and content type in that order.
    app.add_middleware(JSONContentTypeMiddleware)
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(RealIPMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(LoggingMiddleware, logger=logger.getChild("web") if logger else None)
    app.add_middleware(HeartbeatMiddleware, path="/ping")

    app.include_router(redirect_router, tags=["Redirect"])
    app.include_router(api_router, prefix="/manage", tags=["Manage"])

    return app
