"""Network fetch primitive for the image cache."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import requests

from config import DOWNLOAD_CHUNK_SIZE, FETCH_TIMEOUT_SECONDS, PARTIAL_SUFFIX

logger = logging.getLogger(__name__)


def partial_path(output_path: Path) -> Path:
    """Get the temporary path a download is streamed into."""
    return output_path.with_name(output_path.name + PARTIAL_SUFFIX)


def download_to_file(
    url: str,
    output_path: Path,
    timeout: float = FETCH_TIMEOUT_SECONDS,
) -> int:
    """Download a URL to a file path and return the number of bytes written.

    The body is streamed into a ``.part`` file next to ``output_path`` and
    renamed into place only once complete, so a failed download never
    leaves a truncated file under the final name.

    Args:
        url: Resource to fetch.
        output_path: Final location of the downloaded file.
        timeout: Request timeout in seconds.

    Returns:
        Number of bytes written.

    Raises:
        requests.RequestException: On network errors, malformed URLs or
            HTTP error statuses.
        OSError: If the file cannot be written.
    """
    tmp_path = partial_path(output_path)
    try:
        with requests.get(url, timeout=timeout, stream=True) as response:
            response.raise_for_status()
            written = 0
            with open(tmp_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
        os.replace(tmp_path, output_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug("Downloaded %s (%s bytes) to %s", url, written, output_path)
    return written
