"""Cache cleanup utilities for evicting stale and unreferenced images."""

from __future__ import annotations

import logging
import stat
import time
from pathlib import Path
from typing import Iterable

from entry import CleanupReport
from naming import derive_file_name

logger = logging.getLogger(__name__)


def referenced_file_names(urls: Iterable[str]) -> set[str]:
    """Map image URLs to the set of cache file names they occupy.

    URLs without an extractable extension contribute nothing.
    """
    names: set[str] = set()
    for url in urls:
        name = derive_file_name(url)
        if name is not None:
            names.add(name)
    return names


def _is_under_cache(path: Path, cache_dir: Path) -> bool:
    # lexical check: a symlink entry is evicted itself, its target is never touched
    try:
        path.absolute().relative_to(cache_dir.absolute())
        return True
    except ValueError:
        return False


def _list_cache_files(cache_dir: Path) -> list[Path] | None:
    try:
        return sorted(cache_dir.iterdir())
    except OSError as e:
        logger.warning("Cannot list cache directory %s: %s", cache_dir, e)
        return None


def sweep_cache_dir(
    cache_dir: Path,
    current_image_urls: Iterable[str],
    max_age_seconds: float,
    dry_run: bool = False,
    now: float | None = None,
) -> CleanupReport:
    """Delete cache files that are stale or no longer referenced.

    A file is deleted when its modification time is more than
    ``max_age_seconds`` in the past, or when its name is not derived from
    any of ``current_image_urls``. An empty URL collection deletes nothing:
    it usually means the caller's data is being rebuilt and cannot be
    trusted.

    Args:
        cache_dir: Directory holding the cached images.
        current_image_urls: URLs of every image the application still shows.
        max_age_seconds: Retention window.
        dry_run: Log what would be deleted without removing files.
        now: Reference timestamp (defaults to the current time).

    Returns:
        CleanupReport describing the sweep.
    """
    report = CleanupReport(dry_run=dry_run)

    if isinstance(current_image_urls, str):
        # a bare URL would otherwise be split into characters
        current_image_urls = [current_image_urls]
    urls = set(current_image_urls)
    if not urls:
        logger.info("No current images supplied, skipping cache cleanup")
        report.aborted = "empty_reference_set"
        return report

    current_files = referenced_file_names(urls)

    files = _list_cache_files(cache_dir)
    if files is None:
        report.aborted = "listing_failed"
        return report

    if now is None:
        now = time.time()

    for path in files:
        if not _is_under_cache(path, cache_dir):
            logger.warning("Skip non-cache path: %s", path)
            continue
        try:
            info = path.lstat()
        except FileNotFoundError:
            report.missing += 1
            continue
        if stat.S_ISDIR(info.st_mode):
            continue
        modified = info.st_mtime

        if now > modified + max_age_seconds:
            bucket = report.stale
        elif path.name not in current_files:
            bucket = report.unreferenced
        else:
            report.kept.append(path)
            continue

        if dry_run:
            logger.info("Would delete %s", path)
            bucket.append(path)
            continue

        try:
            path.unlink()
        except FileNotFoundError:
            report.missing += 1
            continue
        except OSError as e:
            logger.warning("Failed to delete %s: %s", path, e)
            report.failed += 1
            continue
        logger.debug("Deleted %s", path)
        bucket.append(path)

    logger.info(
        "Cache cleanup: %s stale, %s unreferenced, %s kept",
        len(report.stale),
        len(report.unreferenced),
        len(report.kept),
    )
    return report
