"""Exception hierarchy for the short link service."""


class ShortLinkError(Exception):
    """Base exception for all short link errors."""


class InvalidURLError(ShortLinkError, ValueError):
    """Raised when a target URL fails validation."""


class KeyGenerationError(ShortLinkError):
    """Raised when the secure random source cannot produce a key."""


class KeyCollisionError(ShortLinkError):
    """Raised when no free key could be found within the retry budget."""


class StorageError(ShortLinkError):
    """Raised when the storage backend fails or returns undecodable data."""


class ConfigurationError(ShortLinkError):
    """Raised when the service is configured with invalid parameters."""
