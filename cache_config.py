"""
Configuration for the image cache.

Thresholds are bundled in ImageCacheConfig so tests and embedding
applications can tune them without touching module constants.
"""

from dataclasses import dataclass

from config import (
    CACHE_SUBDIR,
    MAX_FILE_AGE_DAYS,
    MIN_FREE_SPACE_BYTES,
    MIN_VALID_CACHE_BYTES,
)

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class ImageCacheConfig:
    """Tunable thresholds for an ImageCache.

    Attributes:
        subdir: Name of the cache directory created under the cache root.
        max_file_age_days: Entries older than this are evicted by cleanup.
        min_free_space_bytes: Downloads are skipped when the cache
                              filesystem has less free space than this.
        min_valid_bytes: Downloads smaller than this are discarded.
    """

    subdir: str = CACHE_SUBDIR
    max_file_age_days: float = MAX_FILE_AGE_DAYS
    min_free_space_bytes: int = MIN_FREE_SPACE_BYTES
    min_valid_bytes: int = MIN_VALID_CACHE_BYTES

    @property
    def max_file_age_seconds(self) -> float:
        return self.max_file_age_days * SECONDS_PER_DAY

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if not self.subdir or "/" in self.subdir or self.subdir in (".", ".."):
            raise ValueError(f"subdir must be a single directory name, got {self.subdir!r}")

        if self.max_file_age_days <= 0:
            raise ValueError(
                f"max_file_age_days must be positive, got {self.max_file_age_days}"
            )

        if self.min_free_space_bytes < 0:
            raise ValueError(
                f"min_free_space_bytes must be non-negative, got {self.min_free_space_bytes}"
            )

        if self.min_valid_bytes < 0:
            raise ValueError(
                f"min_valid_bytes must be non-negative, got {self.min_valid_bytes}"
            )
