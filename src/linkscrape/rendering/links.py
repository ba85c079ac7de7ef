"""Link discovery through the rendering backend's ``links`` capability."""

import logging
from typing import Any

from linkscrape.rendering.base import RenderingClient

logger = logging.getLogger(__name__)


class LinkDiscoveryClient(RenderingClient):
    """Discover the outbound links of a page."""

    capability = "links"
    label = "Links"
    result_type = list

    async def discover_links(self, target_url: str) -> list[str]:
        """Discover links on ``target_url``.

        Duplicates are kept in upstream order.

        Args:
            target_url: Page to inspect.

        Returns:
            Absolute or relative link URLs.
        """
        links: list[str] = await self._call(target_url)
        logger.info("Discovered %d links on %s", len(links), target_url)
        return list(links)

    def _is_valid_result(self, result: Any) -> bool:
        return isinstance(result, list) and all(isinstance(u, str) for u in result)
