"""URL building utilities for the short link service."""

from urllib.parse import quote


REDIRECT_PATH_PREFIX = "/g"


def build_short_url(
    key: str,
    host: str,
    path_prefix: str = REDIRECT_PATH_PREFIX,
) -> str:
    """Build the short URL handed back to clients.

    The result carries no scheme, e.g. ``example.com/g/<key>``.

    Args:
        key: The short key
        host: Host the service is reached on (may include a port)
        path_prefix: Redirect route prefix

    Returns:
        Complete short URL
    """
    base = host.rstrip("/")
    prefix = path_prefix.strip("/")

    if prefix:
        return f"{base}/{prefix}/{key}"
    return f"{base}/{key}"


def location_header_value(url: str) -> str:
    """Make a stored target URL safe for the Location header.

    Only non-ASCII characters are percent-encoded (as UTF-8); everything
    else is passed through unchanged so the client is sent the URL that
    was stored.
    """
    return "".join(c if ord(c) < 0x80 else quote(c, safe="") for c in url)
