"""HTTP client for a running LLM WebScraper server."""

import logging
from typing import Optional, Sequence

import httpx
from pydantic import ValidationError

from .models.schemas import ExtractionResult

logger = logging.getLogger(__name__)

SCRAPE_PATH = "/api/scrape"


class ExtractionClientError(Exception):
    """The server rejected the request or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ExtractionClient:
    """Issues extraction requests against the ``/api/scrape`` endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``
            timeout: Request timeout in seconds (None disables it; completions can be slow)
            client: Pre-configured client to use instead of creating one
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def extract(
        self,
        url: str,
        fields: Sequence[str],
        model: str,
        api_key: str,
    ) -> ExtractionResult:
        """
        Ask the server to extract ``fields`` from ``url``.

        Raises:
            ExtractionClientError: With the server's error message when the
                request fails, or a transport description when unreachable
        """
        payload = {"url": url, "fields": list(fields), "model": model, "apiKey": api_key}
        endpoint = f"{self.base_url}{SCRAPE_PATH}"

        try:
            response = await self.http_client.post(endpoint, json=payload)
        except httpx.HTTPError as e:
            raise ExtractionClientError(f"Could not reach server at {self.base_url}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            message = None
            if isinstance(data, dict):
                message = data.get("error")
            raise ExtractionClientError(
                message or f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise ExtractionClientError("Server returned an invalid response", status_code=response.status_code)
        if data.get("error"):
            raise ExtractionClientError(data["error"], status_code=response.status_code)

        try:
            return ExtractionResult.model_validate(data)
        except ValidationError as e:
            logger.debug(f"Unexpected response body: {data}")
            raise ExtractionClientError(
                "Server returned an invalid response", status_code=response.status_code
            ) from e

    async def close(self) -> None:
        """Clean up resources."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
