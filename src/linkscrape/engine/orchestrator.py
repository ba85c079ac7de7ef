"""Scrape pipeline: discover links, render each one, store the Markdown.

Fetch failures are per link and only skip that link. Discovery and storage
failures abort the whole run. Objects stored before an abort stay stored.
"""

import logging

from linkscrape.core.errors import ScrapeError
from linkscrape.core.models import ScrapeRequest, ScrapeResult
from linkscrape.rendering.links import LinkDiscoveryClient
from linkscrape.rendering.markdown import MarkdownClient
from linkscrape.storage.keys import build_storage_key
from linkscrape.storage.writer import ObjectStoreWriter

logger = logging.getLogger(__name__)


class ScrapeOrchestrator:
    """Run one scrape invocation."""

    def __init__(
        self,
        links_client: LinkDiscoveryClient,
        markdown_client: MarkdownClient,
        writer: ObjectStoreWriter,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            links_client: Client for the links capability.
            markdown_client: Client for the markdown capability.
            writer: Writer for rendered documents.
        """
        self._links_client = links_client
        self._markdown_client = markdown_client
        self._writer = writer

    async def run(self, request: ScrapeRequest) -> ScrapeResult:
        """Run the scrape and fold any failure into the result.

        Args:
            request: What to scrape.

        Returns:
            ScrapeResult with the stored locations or an error message.
        """
        try:
            locations = await self.scrape(request)
        except ScrapeError as e:
            logger.error("Scrape of %s failed: %s", request.url, e)
            return ScrapeResult.failed(f"Scraping failed: {e}")

        return ScrapeResult.succeeded(locations)

    async def scrape(self, request: ScrapeRequest) -> list[str]:
        """Run the scrape.

        Args:
            request: What to scrape.

        Returns:
            Public locations of the stored documents, in discovery order.

        Raises:
            ScrapeError: If link discovery or storage failed.
        """
        links = await self._discover(request.url)

        locations: list[str] = []
        total = len(links)

        for i, link in enumerate(links, 1):
            logger.debug("[%d/%d] Rendering: %s", i, total, link)

            try:
                document = await self._markdown_client.fetch_markdown(link)
            except ScrapeError as e:
                logger.warning("Failed to fetch Markdown for %s: %s", link, e)
                continue

            key = build_storage_key(document.source_url)
            location = await self._writer.store(key, document.to_bytes())
            locations.append(location)

        logger.info(
            "Stored %d of %d links discovered on %s",
            len(locations),
            total,
            request.url,
        )
        return locations

    async def _discover(self, url: str) -> list[str]:
        try:
            return await self._links_client.discover_links(url)
        except ScrapeError as e:
            raise e.prefixed("Failed to fetch links") from e
