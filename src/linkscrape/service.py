"""Request entry point: payload in, status code and response body out."""

import logging
from http import HTTPStatus
from typing import Any, Optional

from botocore.exceptions import BotoCoreError

from linkscrape.config import Settings
from linkscrape.core.errors import ConfigurationError, InputError
from linkscrape.core.interfaces import ObjectStore
from linkscrape.core.models import ScrapeRequest, ScrapeResult
from linkscrape.engine.orchestrator import ScrapeOrchestrator
from linkscrape.engine.retry import RetryEnvelope
from linkscrape.rendering.base import create_http_client
from linkscrape.rendering.links import LinkDiscoveryClient
from linkscrape.rendering.markdown import MarkdownClient
from linkscrape.storage.filesystem import FilesystemObjectStore
from linkscrape.storage.s3 import S3ObjectStore
from linkscrape.storage.writer import ObjectStoreWriter

logger = logging.getLogger(__name__)


def build_object_store(settings: Settings) -> ObjectStore:
    """Create the storage backend named by the settings."""
    if settings.storage_backend == "filesystem":
        return FilesystemObjectStore(settings.output_dir)
    if settings.storage_backend == "s3":
        try:
            return S3ObjectStore(settings.bucket, endpoint_url=settings.s3_endpoint_url)
        except (ValueError, BotoCoreError) as e:
            raise ConfigurationError(f"Failed to create S3 client: {e}") from e
    raise ConfigurationError(f"Unknown storage backend {settings.storage_backend!r}")


class ScrapeService:
    """Handle scrape requests against one set of settings."""

    def __init__(
        self, settings: Settings, store: Optional[ObjectStore] = None
    ) -> None:
        """Initialize the service.

        Args:
            settings: Credentials, retry and storage settings.
            store: Storage backend override. Built from ``settings`` when omitted.
        """
        self._settings = settings
        self._store = store

    async def handle(self, payload: Any) -> tuple[HTTPStatus, dict[str, Any]]:
        """Handle one decoded request payload.

        Returns:
            Status code and response body.
        """
        try:
            request = ScrapeRequest.from_payload(payload)
        except InputError as e:
            return HTTPStatus.BAD_REQUEST, ScrapeResult.failed(str(e)).to_response()

        try:
            result = await self.scrape(request)
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e)
            return (
                HTTPStatus.INTERNAL_SERVER_ERROR,
                ScrapeResult.failed(str(e)).to_response(),
            )

        status = HTTPStatus.OK if result.success else HTTPStatus.INTERNAL_SERVER_ERROR
        return status, result.to_response()

    async def scrape(self, request: ScrapeRequest) -> ScrapeResult:
        """Run one scrape invocation.

        Raises:
            ConfigurationError: If credentials or storage settings are missing.
        """
        settings = self._settings
        credentials = settings.credentials()
        settings.validate()
        retry = RetryEnvelope(settings.retry_policy())
        store = self._store or build_object_store(settings)
        writer = ObjectStoreWriter(store, settings.resolved_public_base_url())

        async with create_http_client(settings.request_timeout) as client:
            orchestrator = ScrapeOrchestrator(
                LinkDiscoveryClient(
                    client, credentials, retry, api_base_url=settings.api_base_url
                ),
                MarkdownClient(
                    client, credentials, retry, api_base_url=settings.api_base_url
                ),
                writer,
            )
            return await orchestrator.run(request)
