"""
Offline image cache.

Takes an image URL and turns it into a local file with a name that can be
recalculated from the URL later, so no index is kept. Downloads are skipped
when the device is low on storage, and old or unreferenced files are
removed by cleanup().

None of the public operations raise: a broken cache only means images show
up uncached. The fetch/locate/sweep variants return the specific outcome.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable

import requests

import cache_cleanup
from cache_config import ImageCacheConfig
from entry import CacheResult, CleanupReport, LookupResult
from fetch import download_to_file
from naming import derive_file_name

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, Path], int]


class ImageCache:
    """Cache of downloaded images in a single directory.

    Args:
        cache_root: Writable, persistent directory provided by the host
                    application; the cache lives in a subdirectory of it.
        config: Thresholds (defaults from config.py).
        fetcher: Callable that downloads a URL to a path and returns the
                 number of bytes written.
    """

    def __init__(
        self,
        cache_root: str | Path,
        config: ImageCacheConfig | None = None,
        fetcher: Fetcher | None = None,
    ) -> None:
        self.config = config or ImageCacheConfig()
        self.config.validate()
        self.cache_dir = Path(cache_root) / self.config.subdir
        self._fetcher = fetcher or download_to_file
        self._ensure_dir()

    def _ensure_dir(self) -> bool:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.warning("Cannot create image cache directory %s: %s", self.cache_dir, e)
            return False

    def derive_file_name(self, url: str) -> str | None:
        return derive_file_name(url)

    def path_for(self, url: str) -> Path | None:
        """Get the cache path for a URL, or None if it cannot be cached."""
        file_name = derive_file_name(url)
        if file_name is None:
            return None
        return self.cache_dir / file_name

    def free_space(self) -> int:
        """Free bytes on the filesystem holding the cache directory."""
        return shutil.disk_usage(self.cache_dir).free

    # -------------------------------------------------------------------------
    # Caching
    # -------------------------------------------------------------------------

    def fetch(self, url: str) -> CacheResult:
        """Cache an image and report what happened."""
        try:
            if not self._ensure_dir():
                return CacheResult(url, "failed", error="cache directory unavailable")

            # don't download images if the device is low on storage
            if self.free_space() < self.config.min_free_space_bytes:
                logger.warning("Device low on storage, not caching images")
                return CacheResult(url, "low_storage")

            path = self.path_for(url)
            if path is None:
                logger.warning("Failed to cache image: no file extension in %s", url)
                return CacheResult(url, "no_extension")

            if path.exists():
                return CacheResult(url, "already_cached", path=path)

            size = self._fetcher(url, path)

            # tiny responses are error pages or invisible pixels
            if size < self.config.min_valid_bytes:
                path.unlink(missing_ok=True)
                logger.debug("Discarded %s: only %s bytes", url, size)
                return CacheResult(url, "too_small", path=path, size_bytes=size)

            return CacheResult(url, "cached", path=path, size_bytes=size)
        # urllib3 reports some malformed hosts as a bare ValueError
        except (OSError, ValueError, requests.RequestException) as e:
            logger.warning("Failed to cache image %s: %s", url, e)
            return CacheResult(url, "failed", error=str(e))

    def cache_image(self, url: str) -> None:
        """Download an image into the cache if it is not there yet."""
        try:
            self.fetch(url)
        except Exception:
            logger.exception("Image cache error for %s", url)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def locate(self, url: str) -> LookupResult:
        try:
            path = self.path_for(url)
            if path is None:
                return LookupResult(url, "no_extension")
            if path.exists():
                return LookupResult(url, "hit", path=path)
            return LookupResult(url, "miss", path=path)
        except Exception:
            logger.exception("Image cache error")
            return LookupResult(url, "error")

    def get_cached_location(self, url: str) -> str | None:
        """Get the cached location of a network image, if it has been cached.

        Fails fast and returns None if for any reason the image is not
        available.
        """
        return self.locate(url).location

    # -------------------------------------------------------------------------
    # Cleanup
    # -------------------------------------------------------------------------

    def sweep(
        self,
        current_image_urls: Iterable[str],
        dry_run: bool = False,
    ) -> CleanupReport:
        return cache_cleanup.sweep_cache_dir(
            self.cache_dir,
            current_image_urls,
            max_age_seconds=self.config.max_file_age_seconds,
            dry_run=dry_run,
        )

    def cleanup(self, current_image_urls: Iterable[str]) -> None:
        """Delete cached images that are stale or no longer referenced.

        An empty set of current images deletes nothing; it most likely
        means the application's data was just rebuilt.
        """
        try:
            self.sweep(current_image_urls)
        except Exception:
            logger.exception("Image cache cleanup error")
