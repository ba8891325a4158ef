"""Header parsing utilities for the short link service."""

from typing import Dict, Optional


def extract_forwarded_headers(headers: Dict[str, str]) -> Dict[str, Optional[str]]:
    """Extract proxy headers from request.

    Args:
        headers: Request headers dictionary

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for, real_ip
    """
    # Convert headers to lowercase for case-insensitive lookup
    headers_lower = {k.lower(): v for k, v in headers.items()}

    return {
        "forwarded_proto": headers_lower.get("x-forwarded-proto"),
        "forwarded_host": headers_lower.get("x-forwarded-host"),
        "forwarded_for": headers_lower.get("x-forwarded-for"),
        "real_ip": headers_lower.get("x-real-ip"),
    }


def resolve_client_ip(headers: Dict[str, str], peer_host: Optional[str] = None) -> str:
    """Resolve the originating client IP.

    Priority:
    1. First hop of X-Forwarded-For
    2. X-Real-IP
    3. Socket peer address

    Args:
        headers: Request headers
        peer_host: Address of the directly connected peer

    Returns:
        Client IP, or "unknown" if nothing is available
    """
    forwarded = extract_forwarded_headers(headers)

    if forwarded["forwarded_for"]:
        first_hop = forwarded["forwarded_for"].split(",")[0].strip()
        if first_hop:
            return first_hop

    if forwarded["real_ip"] and forwarded["real_ip"].strip():
        return forwarded["real_ip"].strip()

    return peer_host or "unknown"


def resolve_public_host(
    headers: Dict[str, str],
    configured_host: Optional[str] = None,
) -> str:
    """Pick the host used in generated short URLs.

    A configured public host wins; otherwise the request Host header is
    used as-is.

    Args:
        headers: Request headers
        configured_host: Optional host from configuration

    Returns:
        Host string (may be empty if the request carried no Host header)
    """
    if configured_host:
        return configured_host.strip().rstrip("/")

    headers_lower = {k.lower(): v for k, v in headers.items()}
    return headers_lower.get("host", "")
