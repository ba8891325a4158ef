"""Core business logic for the short link service."""

from .keygen import KeyGenerator
from .service import ShortLinkService

__all__ = ["KeyGenerator", "ShortLinkService"]
