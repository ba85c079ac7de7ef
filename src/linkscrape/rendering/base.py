"""Shared plumbing for the browser rendering API.

Each capability of the rendering backend is a ``POST`` to
``<api_base>/accounts/<account_id>/browser-rendering/<capability>`` with a
JSON body of ``{"url": ...}``. The backend answers with
``{"success": bool, "result": ...}``.
"""

from typing import Any, Optional

import httpx

from linkscrape import __version__
from linkscrape.core.errors import DecodeError, TransportError, UpstreamRejected
from linkscrape.core.interfaces import RetryableOperation
from linkscrape.core.models import Credentials
from linkscrape.engine.retry import RetryEnvelope

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"
DEFAULT_TIMEOUT = 10.0
USER_AGENT = f"linkscrape/{__version__}"


def create_http_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create the HTTP client shared by the rendering clients."""
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": USER_AGENT},
    )


class RenderingRequest(RetryableOperation):
    """One authenticated POST to a rendering capability."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        api_token: str,
        target_url: str,
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self._api_token = api_token
        self._target_url = target_url

    @property
    def description(self) -> str:
        return f"{self._endpoint} ({self._target_url})"

    async def attempt(self) -> httpx.Response:
        return await self._client.post(
            self._endpoint,
            headers={
                "Authorization": f"Bearer {self._api_token}",
                "Content-Type": "application/json",
            },
            json={"url": self._target_url},
        )


class RenderingClient:
    """Base class for a single rendering capability.

    Subclasses set ``capability`` (the endpoint suffix), ``label`` (used in
    error messages) and ``result_type`` (the expected type of ``result``).
    """

    capability: str = ""
    label: str = ""
    result_type: type = object

    def __init__(
        self,
        client: httpx.AsyncClient,
        credentials: Credentials,
        retry: Optional[RetryEnvelope] = None,
        api_base_url: str = DEFAULT_API_BASE_URL,
    ) -> None:
        self._client = client
        self._credentials = credentials
        self._retry = retry or RetryEnvelope()
        self._api_base_url = api_base_url.rstrip("/")

    @property
    def endpoint(self) -> str:
        return (
            f"{self._api_base_url}/accounts/{self._credentials.account_id}"
            f"/browser-rendering/{self.capability}"
        )

    async def _call(self, target_url: str) -> Any:
        """Call the capability for ``target_url`` and return ``result``.

        Raises:
            TransportError: If every attempt failed.
            UpstreamRejected: If the backend reported ``success: false``.
            DecodeError: If the body is not the expected envelope.
        """
        operation = RenderingRequest(
            self._client,
            self.endpoint,
            self._credentials.api_token,
            target_url,
        )

        try:
            response = await self._retry.run(operation)
        except TransportError as e:
            raise TransportError(
                f"{self.label} request failed: {e}",
                url=target_url,
                attempts=e.attempts,
                status_code=e.status_code,
            ) from e

        return self._decode(response, target_url)

    def _decode(self, response: httpx.Response, target_url: str) -> Any:
        prefix = f"Failed to parse {self.label.lower()} response"

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(
                f"{prefix}: {e}", capability=self.capability, url=target_url
            ) from e

        if not isinstance(payload, dict) or not isinstance(
            payload.get("success"), bool
        ):
            raise DecodeError(
                f"{prefix}: missing boolean `success`",
                capability=self.capability,
                url=target_url,
            )

        if not payload["success"]:
            raise UpstreamRejected(
                f"{self.label} API returned success: false",
                capability=self.capability,
                url=target_url,
            )

        result = payload.get("result")
        if not self._is_valid_result(result):
            raise DecodeError(
                f"{prefix}: unexpected `result` of type {type(result).__name__}",
                capability=self.capability,
                url=target_url,
            )

        return result

    def _is_valid_result(self, result: Any) -> bool:
        return isinstance(result, self.result_type)
