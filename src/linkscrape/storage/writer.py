"""Write payloads to an object store and report their public location."""

import logging

from linkscrape.core.errors import StorageError
from linkscrape.core.interfaces import ObjectStore

logger = logging.getLogger(__name__)


class ObjectStoreWriter:
    """Persist payloads and map keys to public locations."""

    def __init__(self, store: ObjectStore, public_base_url: str) -> None:
        """Initialize the writer.

        Args:
            store: Backend that receives the objects.
            public_base_url: Base URL under which stored keys are served.
        """
        self._store = store
        self._public_base_url = public_base_url.rstrip("/")

    def public_location(self, key: str) -> str:
        return f"{self._public_base_url}/{key}"

    async def store(
        self, key: str, payload: bytes, content_type: str = "text/markdown"
    ) -> str:
        """Store ``payload`` under ``key``.

        Args:
            key: Object key.
            payload: Object body.
            content_type: MIME type passed to the backend.

        Returns:
            Public location of the stored object.

        Raises:
            StorageError: If the backend failed to store the object.
        """
        try:
            await self._store.put(key, payload, content_type=content_type)
        except Exception as e:
            raise StorageError(f"Failed to store {key}: {e}", key=key) from e

        location = self.public_location(key)
        logger.info("Stored %s (%d bytes) in %s", key, len(payload), self._store.name)
        return location
