"""Object key derivation for stored Markdown."""

import time
from typing import Optional

KEY_PREFIX = "markdown"
KEY_SUFFIX = ".md"


def current_millis() -> int:
    """Return the current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def url_to_filename(url: str, timestamp_ms: Optional[int] = None) -> str:
    """Convert a URL to a safe, time-stamped file name.

    Examples:
        https://a.com/x -> https_a_com_x_<timestamp_ms>
    """
    safe_url = url.replace("://", "_").replace("/", "_").replace(".", "_")
    if timestamp_ms is None:
        timestamp_ms = current_millis()
    return f"{safe_url}_{timestamp_ms}"


def build_storage_key(url: str, timestamp_ms: Optional[int] = None) -> str:
    """Build the object key for the Markdown rendition of ``url``."""
    return f"{KEY_PREFIX}/{url_to_filename(url, timestamp_ms)}{KEY_SUFFIX}"
