#!/usr/bin/env python3
"""
Command-line interface for the short link store.

Usage:
    python shortlink_cli.py shorten <url> [--expires-in SECONDS]
    python shortlink_cli.py resolve <key>
    python shortlink_cli.py list
    python shortlink_cli.py delete <key>

The store is selected with the same environment variables as the service
(STORAGE_BACKEND, DATABASE_URL, DYNAMODB_TABLE, ...).
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import Config, load_config
from lib.database import create_store
from lib.keygen import KeyGenerator
from lib.service import ShortLinkService
from lib.exceptions import ShortLinkError
from lib.common.logging_config import setup_logging


class ShortLinkCLI:
    """Command-line interface for the short link store."""

    def __init__(self, config: Config, verbose: bool = False, out=None, err=None):
        """Initialize CLI."""
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.service = None

    def initialize(self):
        """Build store and service."""
        store = create_store(self.config, logger=self.logger)
        self.service = ShortLinkService(
            store=store,
            key_generator=KeyGenerator(),
            logger=self.logger,
            collision_check=self.config.collision_check,
            max_collision_retries=self.config.max_collision_retries,
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    def _emit(self, payload: dict, ok: bool = True) -> int:
        print(json.dumps(payload, indent=2), file=self.out if ok else self.err)
        return 0 if ok else 1

    async def shorten(self, url: str, expires_in: Optional[int] = None) -> int:
        """Shorten a URL."""
        try:
            link = await self.service.create_redirect(url, expires_in=expires_in)
        except ValueError as e:
            return self._emit({"success": False, "error": str(e)}, ok=False)

        return self._emit({
            "success": True,
            "key": link.key,
            "url": link.target_url,
            "created_at": link.created_at,
            "expires_at": link.expires_at,
        })

    async def resolve(self, key: str) -> int:
        """Look up a key. This counts as an access, like a redirect."""
        if not KeyGenerator.is_valid_key(key):
            return self._emit({"success": False, "error": "Invalid key format"}, ok=False)

        link = await self.service.resolve(key)
        if link is None:
            return self._emit({"success": False, "error": f"Key '{key}' not found"}, ok=False)

        return self._emit({
            "success": True,
            "key": link.key,
            "url": link.target_url,
            "redirect_count": link.access_count,
        })

    async def list_urls(self) -> int:
        """List every stored short link."""
        links = await self.service.list_redirects()
        return self._emit({
            "success": True,
            "count": len(links),
            "urls": [
                {"key": link.key, "url": link.target_url, "redirect_count": link.access_count}
                for link in links
            ],
        })

    async def delete(self, key: str) -> int:
        """Delete a short link."""
        await self.service.delete_redirect(key)
        return self._emit({"success": True, "message": "Redirect deleted successfully"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="shortlink CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten a URL that expires after one day
  %(prog)s shorten https://example.com/long/url --expires-in 86400

  # Resolve a key
  %(prog)s resolve aB3dE5fG7hJ9kL1m

  # List short links
  %(prog)s list

  # Delete a short link
  %(prog)s delete aB3dE5fG7hJ9kL1m
        """
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--expires-in", type=int, help="Lifetime in seconds")

    resolve_parser = subparsers.add_parser("resolve", help="Look up the URL for a key")
    resolve_parser.add_argument("key", help="Short key")

    subparsers.add_parser("list", help="List short links")

    delete_parser = subparsers.add_parser("delete", help="Delete a short link")
    delete_parser.add_argument("key", help="Short key")

    return parser


async def run(args: argparse.Namespace, cli: ShortLinkCLI) -> int:
    """Execute the parsed command."""
    cli.initialize()
    try:
        if args.command == "shorten":
            return await cli.shorten(args.url, args.expires_in)
        if args.command == "resolve":
            return await cli.resolve(args.key)
        if args.command == "list":
            return await cli.list_urls()
        if args.command == "delete":
            return await cli.delete(args.key)
        return 1
    except ShortLinkError as e:
        return cli._emit({"success": False, "error": f"Error: {e}"}, ok=False)
    finally:
        await cli.cleanup()


async def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = ShortLinkCLI(config=load_config(), verbose=args.verbose)
    return await run(args, cli)


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
