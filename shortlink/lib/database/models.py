"""Data models for the short link store."""

import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class ShortLink:
    """Represents a short link record in the store."""

    key: str
    target_url: str
    access_count: int = 0
    created_at: int = 0
    expires_at: Optional[int] = None

    def is_expired(self, now: Optional[int] = None) -> bool:
        """Check whether the link has passed its expiry time.

        Args:
            now: Unix timestamp to compare against (defaults to current time)

        Returns:
            True if the link carries an expiry and it has been reached
        """
        if self.expires_at is None:
            return False
        if now is None:
            now = int(time.time())
        return self.expires_at <= now

    def to_item(self) -> Dict[str, Any]:
        """Convert to the persisted record shape."""
        item = {
            "id": self.key,
            "redirect_url": self.target_url,
            "access_count": self.access_count,
            "created_at": self.created_at,
        }
        if self.expires_at is not None:
            item["expires_at"] = self.expires_at
        return item

    @classmethod
    def from_item(cls, item: Mapping[str, Any]) -> "ShortLink":
        """Create from a persisted record.

        Numeric attributes may arrive as ``Decimal`` (DynamoDB) or ``int``.

        Args:
            item: Mapping with id, redirect_url, access_count, created_at

        Returns:
            ShortLink instance

        Raises:
            KeyError: If a required attribute is missing
            TypeError: If an attribute has the wrong type
            ValueError: If a numeric attribute cannot be converted
        """
        key = item["id"]
        target_url = item["redirect_url"]
        if not isinstance(key, str) or not isinstance(target_url, str):
            raise TypeError("id and redirect_url must be strings")

        access_count = int(item.get("access_count") or 0)
        if access_count < 0:
            raise ValueError(f"negative access_count for {key}: {access_count}")

        expires_at = item.get("expires_at")
        return cls(
            key=key,
            target_url=target_url,
            access_count=access_count,
            created_at=int(item.get("created_at") or 0),
            expires_at=int(expires_at) if expires_at is not None else None,
        )
