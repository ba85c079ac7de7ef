"""Runtime settings for linkscrape.

Values are read from environment variables. A ``.env`` file in the current
working directory is loaded when this module is imported. Only the edges
(the service entry point and the CLI) read settings. The pipeline itself
receives everything it needs as arguments.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, TypeVar

from dotenv import find_dotenv, load_dotenv

from linkscrape.core.errors import ConfigurationError
from linkscrape.core.models import Credentials
from linkscrape.engine.retry import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY, RetryPolicy
from linkscrape.rendering.base import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT

load_dotenv(find_dotenv(usecwd=True), override=False)

STORAGE_BACKENDS = ("s3", "filesystem")

T = TypeVar("T")


def _env(*names: str, default: str = "") -> str:
    """Return the first non-empty variable among ``names``."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return default


def _env_number(name: str, default: T, cast: Callable[[str], T]) -> T:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from e


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Rendering backend
    # ------------------------------------------------------------------
    api_token: str = field(
        default_factory=lambda: _env("LINKSCRAPE_API_TOKEN", "CLOUDFLARE_API_TOKEN")
    )
    account_id: str = field(
        default_factory=lambda: _env("LINKSCRAPE_ACCOUNT_ID", "CLOUDFLARE_ACCOUNT_ID")
    )
    api_base_url: str = field(
        default_factory=lambda: _env(
            "LINKSCRAPE_API_BASE_URL", default=DEFAULT_API_BASE_URL
        )
    )
    request_timeout: float = field(
        default_factory=lambda: _env_number("LINKSCRAPE_TIMEOUT", DEFAULT_TIMEOUT, float)
    )

    # ------------------------------------------------------------------
    # Retry
    # ------------------------------------------------------------------
    max_retries: int = field(
        default_factory=lambda: _env_number(
            "LINKSCRAPE_MAX_RETRIES", DEFAULT_MAX_RETRIES, int
        )
    )
    retry_delay: float = field(
        default_factory=lambda: _env_number(
            "LINKSCRAPE_RETRY_DELAY", DEFAULT_RETRY_DELAY, float
        )
    )

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    storage_backend: str = field(
        default_factory=lambda: _env("LINKSCRAPE_STORAGE", default="s3").lower()
    )
    bucket: str = field(default_factory=lambda: _env("LINKSCRAPE_BUCKET"))
    s3_endpoint_url: Optional[str] = field(
        default_factory=lambda: _env("LINKSCRAPE_S3_ENDPOINT_URL") or None
    )
    output_dir: Path = field(
        default_factory=lambda: Path(_env("LINKSCRAPE_OUTPUT_DIR", default="./scraped"))
    )
    public_base_url: str = field(
        default_factory=lambda: _env("LINKSCRAPE_PUBLIC_BASE_URL")
    )

    @classmethod
    def from_env(cls) -> Settings:
        return cls()

    def credentials(self) -> Credentials:
        """Return rendering credentials.

        Raises:
            ConfigurationError: If the token or account id is missing.
        """
        if not self.api_token:
            raise ConfigurationError("Missing API token: set LINKSCRAPE_API_TOKEN")
        if not self.account_id:
            raise ConfigurationError("Missing account ID: set LINKSCRAPE_ACCOUNT_ID")
        return Credentials(api_token=self.api_token, account_id=self.account_id)

    def retry_policy(self) -> RetryPolicy:
        if self.max_retries < 0:
            raise ConfigurationError("LINKSCRAPE_MAX_RETRIES must not be negative")
        if self.retry_delay < 0:
            raise ConfigurationError("LINKSCRAPE_RETRY_DELAY must not be negative")
        return RetryPolicy(max_retries=self.max_retries, delay=self.retry_delay)

    def resolved_public_base_url(self) -> str:
        """Return the base URL that stored keys are published under.

        Falls back to a ``file://`` URL of the output directory for the
        filesystem backend.

        Raises:
            ConfigurationError: If no public base URL is configured for s3.
        """
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        if self.storage_backend == "filesystem":
            return self.output_dir.resolve().as_uri()
        raise ConfigurationError(
            "Missing public base URL: set LINKSCRAPE_PUBLIC_BASE_URL"
        )

    def validate(self) -> None:
        """Check that the storage settings are usable.

        Raises:
            ConfigurationError: On an unknown backend or a missing bucket.
        """
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"Unknown storage backend {self.storage_backend!r}; "
                f"expected one of {', '.join(STORAGE_BACKENDS)}"
            )
        if self.storage_backend == "s3" and not self.bucket:
            raise ConfigurationError("Missing bucket: set LINKSCRAPE_BUCKET")
        self.resolved_public_base_url()
