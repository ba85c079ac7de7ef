"""Bounded retry with a fixed delay for upstream calls."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from linkscrape.core.errors import TransportError
from linkscrape.core.interfaces import RetryableOperation

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 2.0


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how long to wait before giving up on an operation."""

    max_retries: int = DEFAULT_MAX_RETRIES
    delay: float = DEFAULT_RETRY_DELAY  # seconds, no jitter or growth

    @property
    def max_attempts(self) -> int:
        return 1 + self.max_retries


class RetryEnvelope:
    """Run a retryable operation until it returns a 2xx response."""

    def __init__(self, policy: Optional[RetryPolicy] = None) -> None:
        self._policy = policy or RetryPolicy()

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def run(self, operation: RetryableOperation) -> httpx.Response:
        """Run ``operation`` with retries.

        Non-2xx responses and request errors (timeouts, connection and
        decoding failures, redirect loops) are retried alike.

        Args:
            operation: Operation to attempt.

        Returns:
            The first successful response.

        Raises:
            TransportError: After the last attempt failed.
        """
        max_attempts = self._policy.max_attempts
        attempt = 0

        while True:
            attempt += 1
            last_status: Optional[int] = None
            try:
                response = await operation.attempt()
            except httpx.RequestError as e:
                last_error = f"Request failed after {attempt} attempts: {e}"
            else:
                if response.is_success:
                    return response
                last_status = response.status_code
                last_error = (
                    f"HTTP error after {attempt} attempts: "
                    f"{response.status_code} {response.reason_phrase}".rstrip()
                )

            if attempt >= max_attempts:
                raise TransportError(
                    last_error,
                    attempts=attempt,
                    status_code=last_status,
                )

            logger.warning("Retry attempt %d for %s", attempt, operation.description)
            await asyncio.sleep(self._policy.delay)
