"""Markdown rendering through the rendering backend's ``markdown`` capability."""

from linkscrape.core.models import RenderedDocument
from linkscrape.rendering.base import RenderingClient


class MarkdownClient(RenderingClient):
    """Fetch a Markdown rendition of a page."""

    capability = "markdown"
    label = "Markdown"
    result_type = str

    async def fetch_markdown(self, link_url: str) -> RenderedDocument:
        """Render ``link_url`` as Markdown.

        Args:
            link_url: Page to render.

        Returns:
            The rendered document.
        """
        text: str = await self._call(link_url)
        return RenderedDocument(source_url=link_url, markdown_text=text)
