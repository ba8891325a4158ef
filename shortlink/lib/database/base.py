"""Abstract base class for short link store implementations."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import StorageError
from .models import ShortLink


class ShortLinkStoreBase(ABC):
    """Abstract base class for short link storage operations.

    Handlers only talk to the backend through ``get``, ``put``,
    ``put_if_absent``, ``delete`` and ``list``. Backends implement the
    primitives below; the read-side rules (best-effort access counting,
    expiry, skipping undecodable records) are applied here once.
    """

    backend_name = "base"

    def __init__(self, logger: Optional[logging.Logger] = None, debug: bool = False):
        """Initialize store.

        Args:
            logger: Optional logger instance
            debug: Log swallowed failures (increment, undecodable records)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.debug = debug

    async def get(self, key: str) -> Optional[ShortLink]:
        """Get the short link for a key and count the access.

        The access count increment is attempted once after a successful
        read. If it fails the read still succeeds and the caller receives
        the pre-increment record.

        Args:
            key: The short key to lookup

        Returns:
            The record if found and not expired, None otherwise

        Raises:
            StorageError: If the backend fails or the record cannot be decoded
        """
        item = await self._fetch(key)
        if item is None:
            return None

        try:
            link = ShortLink.from_item(item)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"failed to decode item {key}: {e}") from e

        if link.is_expired():
            self.logger.debug(f"Short link expired: {key}")
            return None

        try:
            await self._increment_access_count(key)
        except Exception as e:
            if self.debug:
                self.logger.debug(f"Failed to increment access count for {key}: {e}")

        return link

    async def list(self) -> List[ShortLink]:
        """List all stored short links in unspecified order.

        Records that fail to decode and expired records are skipped.

        Returns:
            List of records

        Raises:
            StorageError: If the backend scan fails
        """
        now = int(time.time())
        links = []
        for item in await self._scan_items():
            try:
                link = ShortLink.from_item(item)
            except (KeyError, TypeError, ValueError) as e:
                if self.debug:
                    self.logger.debug(f"Skipping undecodable item: {e}")
                continue
            if link.is_expired(now):
                continue
            links.append(link)
        return links

    @staticmethod
    def _new_link(key: str, target_url: str, expires_at: Optional[int] = None) -> ShortLink:
        """Build a fresh record with a zero access count."""
        return ShortLink(
            key=key,
            target_url=target_url,
            access_count=0,
            created_at=int(time.time()),
            expires_at=expires_at,
        )

    @abstractmethod
    async def put(self, key: str, target_url: str, expires_at: Optional[int] = None) -> ShortLink:
        """Store a new record, overwriting any record with the same key.

        Args:
            key: The short key
            target_url: The URL to redirect to
            expires_at: Optional Unix timestamp after which the link is gone

        Returns:
            The stored record

        Raises:
            StorageError: If the backend write fails
        """

    @abstractmethod
    async def put_if_absent(
        self,
        key: str,
        target_url: str,
        expires_at: Optional[int] = None,
    ) -> Optional[ShortLink]:
        """Store a new record only if the key is free.

        Returns:
            The stored record, or None if the key is already taken

        Raises:
            StorageError: If the backend write fails
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a record. Deleting a missing key is not an error.

        Raises:
            StorageError: If the backend delete fails
        """

    @abstractmethod
    async def _fetch(self, key: str) -> Optional[Mapping[str, Any]]:
        """Fetch the raw persisted item for a key, or None if absent."""

    @abstractmethod
    async def _increment_access_count(self, key: str) -> None:
        """Atomically add one to the stored access count."""

    @abstractmethod
    async def _scan_items(self) -> List[Mapping[str, Any]]:
        """Return every raw persisted item."""

    @abstractmethod
    async def ensure_tables(self) -> None:
        """Provision the backing table or collection if it does not exist."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """

    @abstractmethod
    async def close(self) -> None:
        """Release backend connections."""

    def describe(self) -> Dict[str, Any]:
        """Describe the store for startup logging."""
        return {"backend": self.backend_name, "debug": self.debug}
