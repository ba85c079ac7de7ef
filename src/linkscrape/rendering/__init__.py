"""Clients for the remote browser rendering API."""

from linkscrape.rendering.base import RenderingClient, create_http_client
from linkscrape.rendering.links import LinkDiscoveryClient
from linkscrape.rendering.markdown import MarkdownClient

__all__ = [
    "RenderingClient",
    "LinkDiscoveryClient",
    "MarkdownClient",
    "create_http_client",
]
