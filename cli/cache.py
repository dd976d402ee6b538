"""Cache command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path

from tqdm import tqdm

from image_cache import ImageCache

logger = logging.getLogger(__name__)


def add_cache_subparser(subparsers: argparse._SubParsersAction) -> None:
    cache_parser = subparsers.add_parser(
        "cache",
        help="Fetch, look up and clean up cached images",
    )
    cache_subparsers = cache_parser.add_subparsers(
        dest="cache_command",
        help="Cache command",
    )

    fetch_parser = cache_subparsers.add_parser(
        "fetch",
        help="Download images into the cache",
    )
    fetch_parser.add_argument("urls", nargs="*", help="Image URLs to cache")
    fetch_parser.add_argument(
        "--urls-file",
        type=Path,
        help="File with one image URL per line",
    )
    fetch_parser.set_defaults(_cmd=cmd_cache_fetch)

    lookup_parser = cache_subparsers.add_parser(
        "lookup",
        help="Print the cached file path for an image URL",
    )
    lookup_parser.add_argument("url", help="Image URL")
    lookup_parser.set_defaults(_cmd=cmd_cache_lookup)

    cleanup_parser = cache_subparsers.add_parser(
        "cleanup",
        help="Delete stale images and images not listed in the URLs file",
    )
    cleanup_parser.add_argument(
        "--urls-file",
        type=Path,
        required=True,
        help="File with one current image URL per line",
    )
    cleanup_parser.add_argument(
        "-n", "--dry-run",
        action="store_true",
        help="Print what would be deleted without removing files",
    )
    cleanup_parser.set_defaults(_cmd=cmd_cache_cleanup)

    cache_parser.set_defaults(_cache_parser=cache_parser)


def read_urls_file(path: Path) -> list[str]:
    """Read non-empty, non-comment lines from a URL list file."""
    urls = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            urls.append(line)
    return urls


def cmd_cache_fetch(args: argparse.Namespace) -> int:
    urls = list(args.urls)
    if args.urls_file:
        urls.extend(read_urls_file(args.urls_file))
    if not urls:
        logger.error("No URLs given")
        return 1

    cache = ImageCache(args.cache_root)
    outcomes: Counter[str] = Counter()
    for url in tqdm(urls, desc="Caching"):
        result = cache.fetch(url)
        outcomes[result.outcome] += 1

    for outcome, count in sorted(outcomes.items()):
        logger.info("%-15s %s", outcome, count)
    logger.info("Cache directory: %s", cache.cache_dir)
    return 0


def cmd_cache_lookup(args: argparse.Namespace) -> int:
    cache = ImageCache(args.cache_root)
    location = cache.get_cached_location(args.url)
    if location is None:
        logger.info("Not cached: %s", args.url)
        return 1
    print(location)
    return 0


def cmd_cache_cleanup(args: argparse.Namespace) -> int:
    urls = read_urls_file(args.urls_file)
    cache = ImageCache(args.cache_root)
    report = cache.sweep(urls, dry_run=args.dry_run)

    if report.aborted:
        logger.warning("Cleanup skipped: %s", report.aborted)
        return 0

    if args.dry_run:
        logger.info("Dry run complete.")
    logger.info("Deleted:      %s", report.deleted)
    logger.info("Stale:        %s", len(report.stale))
    logger.info("Unreferenced: %s", len(report.unreferenced))
    logger.info("Kept:         %s", len(report.kept))
    logger.info("Missing:      %s", report.missing)
    logger.info("Failed:       %s", report.failed)
    return 0
