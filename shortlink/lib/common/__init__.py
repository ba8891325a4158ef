"""Common utilities for the short link service."""

from .validators import is_valid_url
from .headers import extract_forwarded_headers, resolve_client_ip, resolve_public_host
from .url_builder import build_short_url, location_header_value
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "extract_forwarded_headers",
    "resolve_client_ip",
    "resolve_public_host",
    "build_short_url",
    "location_header_value",
    "setup_logging",
]
