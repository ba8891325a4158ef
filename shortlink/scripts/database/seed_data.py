#!/usr/bin/env python3
"""
Seed sample short links into the configured store.

Usage:
    STORAGE_BACKEND=postgres python seed_data.py --count 10
"""

import argparse
import asyncio
import sys
import os
import random

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from lib.database import create_store
from lib.keygen import KeyGenerator
from lib.exceptions import ShortLinkError
from lib.common.logging_config import setup_logging


# Sample URLs for testing
SAMPLE_URLS = [
    "https://github.com/python/cpython",
    "https://docs.python.org/3/library/asyncio.html",
    "https://fastapi.tiangolo.com/",
    "https://www.postgresql.org/docs/",
    "https://docs.aws.amazon.com/dynamodb/",
    "https://stackoverflow.com/questions/tagged/python",
    "https://news.ycombinator.com/",
    "https://www.reddit.com/r/programming/",
]


async def seed(store, count: int, logger) -> int:
    """Store ``count`` sample links and return how many were written."""
    generator = KeyGenerator()
    created = 0
    for i in range(count):
        url = f"{random.choice(SAMPLE_URLS)}?test={i}&seed=true"
        key = generator.generate()
        try:
            await store.put(key, url)
        except ShortLinkError as e:
            logger.warning(f"Failed to create URL {i}: {e}")
            continue
        logger.info(f"Created: {key} -> {url}")
        created += 1
    return created


async def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed test data")
    parser.add_argument("--count", type=int, default=10, help="Number of URLs to create")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")
    store = create_store(load_config(), logger=logger)

    try:
        logger.info(f"Creating {args.count} test URLs...")
        created = await seed(store, args.count, logger)
        logger.info(f"Successfully created {created} URLs")

        links = await store.list()
        logger.info(f"Total URLs in store: {len(links)}")
        return 0

    except ShortLinkError as e:
        logger.error(f"Error seeding data: {e}")
        return 1
    finally:
        await store.close()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
