"""
Result types for image cache operations.

The public ImageCache methods never raise and return nothing useful to the
application. These types carry the specific outcome of each call so tests
and the CLI can see why an image was, or was not, cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

CacheOutcome = Literal[
    "cached",
    "already_cached",
    "low_storage",
    "no_extension",
    "too_small",
    "failed",
]

LookupOutcome = Literal["hit", "miss", "no_extension", "error"]

CleanupAbort = Literal["empty_reference_set", "listing_failed"]


@dataclass
class CacheResult:
    """Outcome of a single cache attempt.

    Attributes:
        url: The requested image URL.
        outcome: What happened (see CacheOutcome).
        path: Target cache file path, when a name could be derived.
        size_bytes: Bytes written by the fetch, when one happened.
        error: Description of the failure for outcome "failed".
    """

    url: str
    outcome: CacheOutcome
    path: Path | None = None
    size_bytes: int | None = None
    error: str | None = None

    @property
    def is_stored(self) -> bool:
        """True if the image is on disk after this call."""
        return self.outcome in ("cached", "already_cached")


@dataclass
class LookupResult:
    """Outcome of a cached-location lookup."""

    url: str
    outcome: LookupOutcome
    path: Path | None = None

    @property
    def location(self) -> str | None:
        if self.outcome != "hit" or self.path is None:
            return None
        return str(self.path.absolute())


@dataclass
class CleanupReport:
    """Summary of a cleanup sweep over the cache directory.

    Attributes:
        aborted: Why the sweep did nothing, or None if it ran.
        dry_run: Whether deletions were only reported.
        stale: Files deleted (or that would be) for exceeding the age limit.
        unreferenced: Fresh files deleted (or that would be) for not being
                      in the current image set.
        kept: Files left in place.
        missing: Files that disappeared before they could be examined.
        failed: Files whose deletion raised an error.
    """

    aborted: CleanupAbort | None = None
    dry_run: bool = False
    stale: list[Path] = field(default_factory=list)
    unreferenced: list[Path] = field(default_factory=list)
    kept: list[Path] = field(default_factory=list)
    missing: int = 0
    failed: int = 0

    @property
    def deleted(self) -> int:
        return len(self.stale) + len(self.unreferenced)

    def to_dict(self) -> dict:
        """Convert to a counts dictionary for logging or JSON output."""
        return {
            "aborted": self.aborted,
            "dry_run": self.dry_run,
            "deleted": self.deleted,
            "stale": len(self.stale),
            "unreferenced": len(self.unreferenced),
            "kept": len(self.kept),
            "missing": self.missing,
            "failed": self.failed,
        }
