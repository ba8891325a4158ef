#!/usr/bin/env python3
"""
Main entry point for the short link service.

Concurrency: every request runs as its own asyncio task (FastAPI + uvicorn).
The store handle is built once in the lifespan and shared by all requests.
Set WORKERS > 1 for multi-process scaling (each worker builds its own store).

Usage:
    python app.py

Environment variables:
    PORT - Port to listen on (default 5000)
    STORAGE_BACKEND - memory, postgres or dynamodb
    DATABASE_URL - PostgreSQL connection URL
    AWS_REGION, DYNAMODB_TABLE, DYNAMODB_ENDPOINT - DynamoDB settings
    CREATE_TABLES - Set to true to provision the table on startup
    DEBUG - Enable debug mode
    LOG_LEVEL - Logging level
"""

import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from lib.database import create_store
from lib.keygen import KeyGenerator
from lib.service import ShortLinkService
from lib.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store and service on startup, close them on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlink service...")

    store = create_store(config, logger=logger.getChild("store"))
    logger.info(f"Storage backend: {store.describe()}")

    if config.create_tables:
        await store.ensure_tables()

    service = ShortLinkService(
        store=store,
        key_generator=KeyGenerator(),
        logger=logger.getChild("service"),
        collision_check=config.collision_check,
        max_collision_retries=config.max_collision_retries,
    )

    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down shortlink service...")
    await service.close()
    logger.info("Service stopped")


def build_app(config: Config, logger) -> FastAPI:
    """Create the app with the store wired in by the lifespan."""
    app = create_app(
        store_instance=None,  # Set in lifespan
        service_instance=None,
        config=config,
        logger=logger,
    )
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.effective_log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortlink service")
    logger.debug(f"Configuration: {config.model_dump()}")

    app = build_app(config, logger)

    # uvicorn stops accepting connections on SIGINT/SIGTERM and gives
    # in-flight requests the grace period before closing them.
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.effective_log_level.lower(),
        access_log=False,
        timeout_graceful_shutdown=config.shutdown_grace_seconds,
    )

    server = uvicorn.Server(uvicorn_config)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

    logger.info("Server shut down")


if __name__ == "__main__":
    main()
