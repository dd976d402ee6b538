"""Central configuration for the offline image cache.

All thresholds are defined here with descriptive names. ImageCacheConfig
uses these as its defaults, so callers only override what they need.
"""

from pathlib import Path

# =============================================================================
# STORAGE LOCATION
# =============================================================================

# Parent directory used by the CLI when --cache-root is not given
DEFAULT_CACHE_ROOT = Path.home() / ".cache" / "offline-images"

# Fixed subdirectory (under the cache root) that holds every cached image
CACHE_SUBDIR = "olimages"

# =============================================================================
# EVICTION
# =============================================================================

# Files older than this are deleted by cleanup, referenced or not
MAX_FILE_AGE_DAYS = 30

# =============================================================================
# DOWNLOAD GUARDS
# =============================================================================

# Skip downloads entirely when the cache filesystem has less free space
MIN_FREE_SPACE_BYTES = 100 * 1024 * 1024

# Responses smaller than this are error pages or tracking pixels, not images
MIN_VALID_CACHE_BYTES = 64

# =============================================================================
# NETWORK
# =============================================================================

# Request timeout for a single image download (seconds)
FETCH_TIMEOUT_SECONDS = 30

# Streaming chunk size when writing a response body to disk
DOWNLOAD_CHUNK_SIZE = 8192

# Suffix of the temporary file a download is streamed into before the rename
PARTIAL_SUFFIX = ".part"
