"""Management API for the short link service."""

from .routes import router as api_router

__all__ = ["api_router"]
