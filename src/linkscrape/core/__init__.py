"""Core models, errors and interfaces for linkscrape."""

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
    "Credentials",
    "RenderedDocument",
    "ScrapeRequest",
    "ScrapeResult",
    "ObjectStore",
    "RetryableOperation",
    "ConfigurationError",
    "DecodeError",
    "InputError",
    "ScrapeError",
    "StorageError",
    "TransportError",
    "UpstreamRejected",
]
