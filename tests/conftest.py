"""Pytest configuration and shared fixtures.

No test touches the network: ImageCache gets a fake fetcher, and fetch.py
tests replace requests.get.
"""
from pathlib import Path

import pytest

from image_cache import ImageCache

PLENTY_OF_SPACE = 10 * 1024 * 1024 * 1024

# Comfortably above the minimum valid image size
IMAGE_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 200


class FakeFetcher:
    """Stands in for the network: writes a fixed payload and records calls."""

    def __init__(self, payload: bytes = IMAGE_BYTES, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, Path]] = []

    def __call__(self, url: str, output_path: Path) -> int:
        self.calls.append((url, output_path))
        if self.error is not None:
            raise self.error
        output_path.write_bytes(self.payload)
        return len(self.payload)


@pytest.fixture(autouse=True)
def plenty_of_space(monkeypatch):
    """Report ample free space regardless of the machine running the tests."""
    monkeypatch.setattr(ImageCache, "free_space", lambda self: PLENTY_OF_SPACE)


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def cache(tmp_path, fetcher):
    return ImageCache(tmp_path / "cache-root", fetcher=fetcher)
