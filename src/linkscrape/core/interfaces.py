"""Abstract interfaces for linkscrape."""

from abc import ABC, abstractmethod

import httpx


class RetryableOperation(ABC):
    """A single network attempt that is safe to repeat."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Return a short label for log lines."""
        ...

    @abstractmethod
    async def attempt(self) -> httpx.Response:
        """Perform one attempt.

        Returns:
            The response, whatever its status.

        Raises:
            httpx.RequestError: If no usable response was received.
        """
        ...


class ObjectStore(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    async def put(
        self, key: str, data: bytes, content_type: str = "text/markdown"
    ) -> None:
        """Store ``data`` under ``key``, replacing any existing object.

        Args:
            key: Object key, e.g. ``markdown/example_com_1700000000000.md``.
            data: Raw object body.
            content_type: MIME type recorded with the object where supported.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this backend."""
        ...
