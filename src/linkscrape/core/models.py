"""Data models for linkscrape."""

from dataclasses import dataclass, field
from typing import Any, Optional

from linkscrape.core.errors import InputError


@dataclass(frozen=True)
class ScrapeRequest:
    """A request to scrape every link found on ``url``."""

    url: str

    @classmethod
    def from_payload(cls, payload: Any) -> "ScrapeRequest":
        """Create from a decoded JSON payload.

        Raises:
            InputError: If the payload has no usable ``url`` string.
        """
        if not isinstance(payload, dict):
            raise InputError("Invalid request body: expected a JSON object")

        url = payload.get("url")
        if not isinstance(url, str):
            raise InputError("Invalid request body: missing field `url`")

        url = url.strip()
        if not url:
            raise InputError("Invalid request body: `url` must not be empty")

        return cls(url=url)


@dataclass(frozen=True)
class Credentials:
    """Access to the rendering backend."""

    api_token: str
    account_id: str

    def __repr__(self) -> str:
        return f"Credentials(api_token='***', account_id={self.account_id!r})"


@dataclass
class RenderedDocument:
    """Markdown rendition of a single link."""

    source_url: str
    markdown_text: str

    def to_bytes(self) -> bytes:
        return self.markdown_text.encode("utf-8")


@dataclass
class ScrapeResult:
    """Outcome of one scrape invocation."""

    success: bool
    stored_locations: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, locations: list[str]) -> "ScrapeResult":
        return cls(success=True, stored_locations=list(locations))

    @classmethod
    def failed(cls, message: str) -> "ScrapeResult":
        return cls(success=False, stored_locations=[], error=message)

    def to_response(self) -> dict[str, Any]:
        """Convert to the outward response body."""
        return {
            "success": self.success,
            "files": list(self.stored_locations),
            "error": self.error,
        }
