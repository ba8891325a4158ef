"""Database layer for the short link service."""

import logging
from typing import Optional

from ..exceptions import ConfigurationError
from .base import ShortLinkStoreBase
from .memory import MemoryShortLinkStore
from .models import ShortLink

__all__ = [
    "ShortLinkStoreBase",
    "MemoryShortLinkStore",
    "ShortLink",
    "create_store",
]


def create_store(config, logger: Optional[logging.Logger] = None) -> ShortLinkStoreBase:
    """Build the store selected by ``config.storage_backend``.

    Args:
        config: Configuration instance
        logger: Optional logger

    Returns:
        Store instance (not yet provisioned)

    Raises:
        ConfigurationError: If the backend name is unknown
    """
    backend = config.storage_backend.lower()

    if backend == "memory":
        return MemoryShortLinkStore(logger=logger, debug=config.debug)

    if backend == "postgres":
        from .postgres import PostgresShortLinkStore

        return PostgresShortLinkStore(
            db_config=config.database_url,
            connection_timeout_seconds=config.storage_timeout_seconds,
            logger=logger,
            debug=config.debug,
        )

    if backend == "dynamodb":
        from .dynamodb import DynamoDBShortLinkStore

        return DynamoDBShortLinkStore(
            table_name=config.dynamodb_table,
            region=config.aws_region,
            endpoint_url=config.dynamodb_endpoint,
            timeout_seconds=config.storage_timeout_seconds,
            logger=logger,
            debug=config.debug,
        )

    raise ConfigurationError(
        f"Unknown storage backend '{config.storage_backend}' "
        "(expected memory, postgres or dynamodb)"
    )
