"""Pytest configuration and fixtures."""

from typing import Callable, Optional

import pytest

from linkscrape.core.interfaces import ObjectStore
from linkscrape.core.models import Credentials
from linkscrape.engine.retry import RetryEnvelope, RetryPolicy

API_BASE = "https://api.test/client/v4"
ACCOUNT_ID = "acc123"
API_TOKEN = "tok-secret"
PUBLIC_BASE = "https://files.example.com"

LINKS_ENDPOINT = f"{API_BASE}/accounts/{ACCOUNT_ID}/browser-rendering/links"
MARKDOWN_ENDPOINT = f"{API_BASE}/accounts/{ACCOUNT_ID}/browser-rendering/markdown"


class RecordingStore(ObjectStore):
    """In-memory store that can be told to fail on selected keys."""

    def __init__(self, fail_when: Optional[Callable[[str], bool]] = None) -> None:
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self._fail_when = fail_when

    @property
    def name(self) -> str:
        return "memory"

    async def put(
        self, key: str, data: bytes, content_type: str = "text/markdown"
    ) -> None:
        if self._fail_when and self._fail_when(key):
            raise OSError("bucket unavailable")
        self.objects[key] = data
        self.content_types[key] = content_type


@pytest.fixture
def credentials():
    """Rendering credentials for tests."""
    return Credentials(api_token=API_TOKEN, account_id=ACCOUNT_ID)


@pytest.fixture
def fast_retry():
    """Retry envelope with the default attempt budget and no delay."""
    return RetryEnvelope(RetryPolicy(max_retries=3, delay=0))


@pytest.fixture
def store():
    """Empty in-memory object store."""
    return RecordingStore()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every linkscrape-related variable from the environment."""
    for name in (
        "LINKSCRAPE_API_TOKEN",
        "LINKSCRAPE_ACCOUNT_ID",
        "CLOUDFLARE_API_TOKEN",
        "CLOUDFLARE_ACCOUNT_ID",
        "LINKSCRAPE_API_BASE_URL",
        "LINKSCRAPE_TIMEOUT",
        "LINKSCRAPE_MAX_RETRIES",
        "LINKSCRAPE_RETRY_DELAY",
        "LINKSCRAPE_STORAGE",
        "LINKSCRAPE_BUCKET",
        "LINKSCRAPE_S3_ENDPOINT_URL",
        "LINKSCRAPE_OUTPUT_DIR",
        "LINKSCRAPE_PUBLIC_BASE_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
