"""Short key generation utilities."""

import re
import secrets
import string
from typing import Optional

from .exceptions import KeyGenerationError


KEY_LENGTH = 16

# Base62 characters (alphanumeric, case-sensitive)
KEY_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits

KEY_PATTERN = re.compile(r"^[a-zA-Z0-9]{16}$")


class KeyGenerator:
    """Generate random short keys from a cryptographically secure source."""

    ALPHABET = KEY_ALPHABET

    def __init__(self, length: int = KEY_LENGTH, rng: Optional[secrets.SystemRandom] = None):
        """Initialize key generator.

        Args:
            length: Number of characters per key
            rng: Optional secure random source (defaults to the OS source)
        """
        self.length = length
        self._rng = rng or secrets.SystemRandom()

    def generate(self) -> str:
        """Generate a random short key.

        Every character is drawn independently and uniformly from the
        62-character alphabet. No uniqueness check is made here.

        Returns:
            Random short key

        Raises:
            KeyGenerationError: If the secure random source is unavailable
        """
        try:
            return "".join(self._rng.choice(self.ALPHABET) for _ in range(self.length))
        except (NotImplementedError, OSError) as e:
            raise KeyGenerationError(f"secure random source unavailable: {e}") from e

    @staticmethod
    def is_valid_key(key: str) -> bool:
        """Check if key has the short key format (16 alphanumerics).

        Args:
            key: Key to validate

        Returns:
            True if valid format
        """
        return isinstance(key, str) and KEY_PATTERN.fullmatch(key) is not None
