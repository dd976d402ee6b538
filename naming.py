"""
Cache file naming.

A cached image is stored under a name computed from its URL alone, so the
location can be recalculated later without keeping an index.
"""

from __future__ import annotations

import re

# Last dot-prefixed alphanumeric run, ignoring any trailing query or path noise
EXTENSION_PATTERN = re.compile(r"(\.[a-zA-Z0-9]+)[^.]*$")


def string_hash(text: str) -> int:
    """Compute a 32-bit signed polynomial hash of a string.

    Iterates ``h = 31 * h + unit`` over the UTF-16 code units of the text and
    wraps to a signed 32-bit integer. Unlike the built-in ``hash()``, the
    result does not change between interpreter runs.

    Args:
        text: String to hash.

    Returns:
        Integer in the range [-2**31, 2**31).
    """
    data = text.encode("utf-16-be", errors="surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        h = (31 * h + int.from_bytes(data[i:i + 2], "big")) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return h


def extract_extension(url: str) -> str | None:
    """Return the URL's trailing extension (with leading dot), or None."""
    match = EXTENSION_PATTERN.search(url)
    if match is None:
        return None
    return match.group(1)


def derive_file_name(url: str) -> str | None:
    """Derive the cache file name for an image URL.

    The name is the absolute value of the URL's string hash in decimal,
    followed by the URL's extension. Two URLs with the same hash and
    extension share a name.

    Args:
        url: Image URL.

    Returns:
        File name of the form ``"<digits>.jpg"``, or None when the URL has
        no extractable extension.
    """
    if not isinstance(url, str):
        return None
    extension = extract_extension(url)
    if extension is None:
        return None
    return f"{abs(string_hash(url))}{extension}"
