"""
linkscrape - Render every link on a page to Markdown and store it.

Asks a remote browser rendering API for the links on a page, renders each
link as Markdown and stores the result in an object store.

Usage:
    linkscrape https://example.com
    linkscrape https://example.com --storage filesystem -o ./out
"""

__version__ = "0.1.0"

from linkscrape.core.errors import (
    ConfigurationError,
    DecodeError,
    InputError,
    ScrapeError,
    StorageError,
    TransportError,
    UpstreamRejected,
)
from linkscrape.core.interfaces import ObjectStore, RetryableOperation
from linkscrape.core.models import (
    Credentials,
    RenderedDocument,
    ScrapeRequest,
    ScrapeResult,
)

__all__ = [
    "__version__",
    # Models
    "Credentials",
    "RenderedDocument",
    "ScrapeRequest",
    "ScrapeResult",
    # Interfaces
    "ObjectStore",
    "RetryableOperation",
    # Errors
    "ConfigurationError",
    "DecodeError",
    "InputError",
    "ScrapeError",
    "StorageError",
    "TransportError",
    "UpstreamRejected",
]
