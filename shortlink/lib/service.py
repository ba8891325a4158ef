"""Business logic service for the short link service."""

import logging
import time
from typing import List, Optional

from .keygen import KeyGenerator
from .database.base import ShortLinkStoreBase
from .database.models import ShortLink
from .common.validators import is_valid_url
from .exceptions import InvalidURLError, KeyCollisionError


# Longest accepted link lifetime (100 years); keeps expires_at well inside int64
MAX_EXPIRES_IN = 100 * 365 * 24 * 60 * 60


class ShortLinkService:
    """Service layer for shortening, resolving and managing links."""

    def __init__(
        self,
        store: ShortLinkStoreBase,
        key_generator: Optional[KeyGenerator] = None,
        logger: Optional[logging.Logger] = None,
        collision_check: bool = True,
        max_collision_retries: int = 5,
    ):
        """Initialize short link service.

        Args:
            store: Store instance
            key_generator: Optional key generator
            logger: Optional logger
            collision_check: Write keys only if absent and retry on collision
            max_collision_retries: Extra attempts after the first collision
        """
        self.store = store
        self.generator = key_generator or KeyGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.collision_check = collision_check
        self.max_collision_retries = max_collision_retries

    async def create_redirect(
        self,
        target_url: str,
        expires_in: Optional[int] = None,
    ) -> ShortLink:
        """Create a new short link.

        Args:
            target_url: The URL to redirect to
            expires_in: Optional lifetime in seconds

        Returns:
            The stored record

        Raises:
            InvalidURLError: If the URL fails validation
            KeyGenerationError: If no key could be generated
            KeyCollisionError: If every generated key was already taken
            StorageError: If the store fails
        """
        is_valid, error = is_valid_url(target_url)
        if not is_valid:
            raise InvalidURLError(error)

        if expires_in is not None and expires_in <= 0:
            raise ValueError("expires_in must be a positive number of seconds")
        if expires_in is not None and expires_in > MAX_EXPIRES_IN:
            raise ValueError(f"expires_in must be at most {MAX_EXPIRES_IN} seconds")

        expires_at = int(time.time()) + expires_in if expires_in else None

        if not self.collision_check:
            key = self.generator.generate()
            link = await self.store.put(key, target_url, expires_at)
            self.logger.info(f"Created short link: {key} -> {target_url}")
            return link

        for attempt in range(self.max_collision_retries + 1):
            key = self.generator.generate()
            link = await self.store.put_if_absent(key, target_url, expires_at)
            if link is not None:
                if attempt:
                    self.logger.debug(f"Generated key after {attempt + 1} attempts: {key}")
                self.logger.info(f"Created short link: {key} -> {target_url}")
                return link

        raise KeyCollisionError(
            f"Unable to store a unique key after {self.max_collision_retries + 1} attempts"
        )

    async def resolve(self, key: str) -> Optional[ShortLink]:
        """Look up a short link and count the access.

        Args:
            key: The short key

        Returns:
            The record (with its pre-increment access count) or None
        """
        link = await self.store.get(key)
        if link is None:
            self.logger.debug(f"Short key not found: {key}")
        return link

    async def list_redirects(self) -> List[ShortLink]:
        """List every stored short link."""
        return await self.store.list()

    async def delete_redirect(self, key: str) -> None:
        """Delete a short link; unknown keys are ignored."""
        await self.store.delete(key)
        self.logger.info(f"Deleted short link: {key}")

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
