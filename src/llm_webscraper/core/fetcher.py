"""HTTP page fetching."""

import logging
from typing import Optional

import httpx

from .error_handling import ErrorClassifier

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetches raw page content with a single HTTP GET."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the page fetcher.

        Args:
            timeout: Request timeout in seconds (None keeps the httpx default)
            user_agent: User-Agent header sent with each request
            client: Pre-configured client to use instead of creating one
            transport: Transport for the created client (ignored with ``client``)
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._owns_client = client is None

        if client is None:
            headers = {"User-Agent": user_agent} if user_agent else {}
            client_kwargs = {"headers": headers, "follow_redirects": True, "transport": transport}
            if timeout is not None:
                client_kwargs["timeout"] = httpx.Timeout(timeout)
            client = httpx.AsyncClient(**client_kwargs)

        self.http_client = client

    async def fetch(self, url: str) -> str:
        """
        Fetch the body of ``url`` as text.

        Raises:
            FetchError: On transport failure, timeout, invalid URL or non-2xx status
        """
        logger.debug(f"Fetching page content from: {url}")

        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            error = ErrorClassifier.classify_fetch_error(e, url)
            logger.warning(f"Fetch failed for {url}: {error}")
            raise error from e

        logger.debug(f"Fetched {len(response.text)} characters from {url}")
        return response.text

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
