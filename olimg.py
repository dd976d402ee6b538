#!/usr/bin/env python3
"""
Command-line interface for the offline image cache.

Usage:
    olimg cache fetch <url>...              # Download images into the cache
    olimg cache fetch --urls-file urls.txt  # Download every URL in a file
    olimg cache lookup <url>                # Print the cached file path
    olimg cache cleanup --urls-file F       # Evict stale/unreferenced images
    olimg cache cleanup --urls-file F -n    # Show what cleanup would delete
"""

import argparse
import logging
import sys
from pathlib import Path

from cli.cache import add_cache_subparser
from config import DEFAULT_CACHE_ROOT
from logging_utils import add_logging_args, configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="olimg",
        description="Offline image cache - download, look up and evict cached images",
    )
    add_logging_args(parser)
    parser.add_argument(
        "--cache-root",
        type=Path,
        default=DEFAULT_CACHE_ROOT,
        help=f"Directory the cache lives under (default: {DEFAULT_CACHE_ROOT})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_cache_subparser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "cache" and args.cache_command is None:
        args._cache_parser.print_help()
        return 1

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
