"""Filesystem storage backend for scraped Markdown."""

from pathlib import Path

from linkscrape.core.interfaces import ObjectStore


class FilesystemObjectStore(ObjectStore):
    """Store objects as files below a root directory."""

    def __init__(self, root: Path) -> None:
        """Initialize the store.

        Args:
            root: Directory that object keys are resolved against.
        """
        self._root = Path(root)

    @property
    def name(self) -> str:
        return "filesystem"

    @property
    def root(self) -> Path:
        return self._root

    def key_to_path(self, key: str) -> Path:
        """Convert an object key to a local filepath.

        Raises:
            ValueError: If the key would resolve outside the root.
        """
        root = self._root.resolve()
        filepath = (root / key).resolve()
        if root not in filepath.parents:
            raise ValueError(f"Key escapes storage root: {key}")
        return filepath

    async def put(
        self, key: str, data: bytes, content_type: str = "text/markdown"
    ) -> None:
        """Write an object to the filesystem.

        Args:
            key: Object key, used as a path relative to the root.
            data: File contents.
            content_type: Ignored; files carry no metadata.
        """
        filepath = self.key_to_path(key)

        # Ensure directory exists
        filepath.parent.mkdir(parents=True, exist_ok=True)

        filepath.write_bytes(data)
