"""Validation utilities for the short link service."""

from typing import Tuple
from urllib.parse import urlparse


ALLOWED_SCHEMES = ("http", "https")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a target URL.

    The URL must be a syntactically valid absolute URI with an http or https
    scheme and a non-empty host.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "url is required"

    # Whitespace and control characters are never valid in a request URI
    if any(c.isspace() or ord(c) < 0x20 or ord(c) == 0x7F for c in url):
        return False, "invalid url format"

    try:
        result = urlparse(url)
    except ValueError:
        return False, "invalid url format"

    # Relative references other than absolute paths do not parse as a URI
    if not result.scheme and not url.startswith("/"):
        return False, "invalid url format"

    if result.scheme not in ALLOWED_SCHEMES:
        return False, "url must use http or https scheme"

    host = result.netloc.rpartition("@")[2]
    if not host:
        return False, "url must have a valid host"

    return True, ""
