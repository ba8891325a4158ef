"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import ASGITransport, AsyncClient

from config import Config
from lib.database.memory import MemoryShortLinkStore
from lib.service import ShortLinkService
from lib.keygen import KeyGenerator
from lib.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
async def store(logger) -> AsyncGenerator[MemoryShortLinkStore, None]:
    """Create in-memory store instance."""
    store = MemoryShortLinkStore(logger=logger, debug=True)

    yield store

    await store.close()


@pytest.fixture
def key_generator():
    """Create key generator."""
    return KeyGenerator()


@pytest.fixture
def service(store, key_generator, logger) -> ShortLinkService:
    """Create service instance."""
    return ShortLinkService(
        store=store,
        key_generator=key_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    """Configuration for the test app."""
    return Config(storage_backend="memory")


@pytest.fixture
def app(store, service, config, logger):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/page",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456?tab=votes#answer",
    ]
