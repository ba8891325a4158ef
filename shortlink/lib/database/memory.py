"""In-memory implementation of the short link store."""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from .base import ShortLinkStoreBase
from .models import ShortLink


class MemoryShortLinkStore(ShortLinkStoreBase):
    """Process-local store for tests and local development.

    Items are kept in the persisted record shape so decoding goes through
    the same path as the real backends.
    """

    backend_name = "memory"

    def __init__(self, logger: Optional[logging.Logger] = None, debug: bool = False):
        super().__init__(logger=logger, debug=debug)
        self._items: Dict[str, Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def put(self, key: str, target_url: str, expires_at: Optional[int] = None) -> ShortLink:
        link = self._new_link(key, target_url, expires_at)
        async with self._lock:
            self._items[key] = link.to_item()
        self.logger.debug(f"Stored short link: {key} -> {target_url}")
        return link

    async def put_if_absent(
        self,
        key: str,
        target_url: str,
        expires_at: Optional[int] = None,
    ) -> Optional[ShortLink]:
        link = self._new_link(key, target_url, expires_at)
        async with self._lock:
            if key in self._items:
                return None
            self._items[key] = link.to_item()
        self.logger.debug(f"Stored short link: {key} -> {target_url}")
        return link

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._items.pop(key, None)

    async def _fetch(self, key: str) -> Optional[Mapping[str, Any]]:
        async with self._lock:
            item = self._items.get(key)
            return dict(item) if item is not None else None

    async def _increment_access_count(self, key: str) -> None:
        async with self._lock:
            item = self._items.get(key)
            if item is not None:
                item["access_count"] = item.get("access_count", 0) + 1

    async def _scan_items(self) -> List[Mapping[str, Any]]:
        async with self._lock:
            return [dict(item) for item in self._items.values()]

    async def ensure_tables(self) -> None:
        return None

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        async with self._lock:
            self._items.clear()
