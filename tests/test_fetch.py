"""Tests for fetch.download_to_file with requests.get replaced."""

from __future__ import annotations

import pytest
import requests

import fetch
from fetch import download_to_file, partial_path
from image_cache import ImageCache


class FakeResponse:
    def __init__(self, chunks, status_code=200, fail_after=None):
        self.chunks = chunks
        self.status_code = status_code
        self.fail_after = fail_after

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def iter_content(self, chunk_size=1):
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i >= self.fail_after:
                raise requests.ConnectionError("connection reset")
            yield chunk


@pytest.fixture
def fake_get(monkeypatch):
    """Install a fake requests.get; returns a setter for the next response."""
    state = {"response": FakeResponse([b"a" * 100]), "calls": []}

    def get(url, **kwargs):
        state["calls"].append((url, kwargs))
        return state["response"]

    monkeypatch.setattr(fetch.requests, "get", get)
    return state


class TestDownloadToFile:
    def test_writes_body_and_returns_size(self, tmp_path, fake_get):
        fake_get["response"] = FakeResponse([b"a" * 50, b"", b"b" * 70])
        out = tmp_path / "img.jpg"

        size = download_to_file("http://x/a.jpg", out)

        assert size == 120
        assert out.read_bytes() == b"a" * 50 + b"b" * 70
        assert not partial_path(out).exists()

    def test_streams_with_timeout(self, tmp_path, fake_get):
        download_to_file("http://x/a.jpg", tmp_path / "img.jpg", timeout=5)
        url, kwargs = fake_get["calls"][0]
        assert url == "http://x/a.jpg"
        assert kwargs == {"timeout": 5, "stream": True}

    def test_http_error_leaves_nothing(self, tmp_path, fake_get):
        fake_get["response"] = FakeResponse([b"not found"], status_code=404)
        out = tmp_path / "img.jpg"

        with pytest.raises(requests.HTTPError):
            download_to_file("http://x/a.jpg", out)

        assert list(tmp_path.iterdir()) == []

    def test_interrupted_download_leaves_nothing(self, tmp_path, fake_get):
        fake_get["response"] = FakeResponse([b"a" * 100, b"b" * 100], fail_after=1)
        out = tmp_path / "img.jpg"

        with pytest.raises(requests.ConnectionError):
            download_to_file("http://x/a.jpg", out)

        assert not out.exists()
        assert not partial_path(out).exists()

    def test_partial_path(self, tmp_path):
        assert partial_path(tmp_path / "123.jpg") == tmp_path / "123.jpg.part"


class TestImageCacheWithDefaultFetcher:
    """ImageCache wired to the real download_to_file."""

    def test_interrupted_download_can_be_retried(self, tmp_path, fake_get):
        cache = ImageCache(tmp_path)
        url = "http://x/a.jpg"

        fake_get["response"] = FakeResponse([b"a" * 100, b"b" * 100], fail_after=1)
        assert cache.fetch(url).outcome == "failed"
        assert list(cache.cache_dir.iterdir()) == []

        fake_get["response"] = FakeResponse([b"a" * 100])
        assert cache.fetch(url).outcome == "cached"
        assert cache.get_cached_location(url) is not None

    def test_error_page_is_not_cached(self, tmp_path, fake_get):
        cache = ImageCache(tmp_path)
        fake_get["response"] = FakeResponse([b"<html>oops</html>"], status_code=500)
        assert cache.fetch("http://x/a.jpg").outcome == "failed"
        assert cache.get_cached_location("http://x/a.jpg") is None

    @pytest.mark.parametrize(
        "url",
        ["http://a..b/a.jpg", "http://" + "h" * 300 + ".com/a.jpg"],
    )
    def test_unparseable_host_is_a_failure(self, tmp_path, url):
        """urllib3 rejects these hosts with a ValueError before connecting."""
        cache = ImageCache(tmp_path)
        result = cache.fetch(url)
        assert result.outcome == "failed"
        assert list(cache.cache_dir.iterdir()) == []
