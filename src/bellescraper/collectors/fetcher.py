"""HTTP page fetcher with retry and linear backoff."""

import asyncio
import logging
from typing import Any, Optional

import httpx

from ..config import config
from .base import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetches raw HTML pages with a fixed browser identity.

    Each call makes up to ``max_retries`` attempts. A transport error or a
    non-2xx status counts as a failed attempt; before attempt ``n + 1`` the
    fetcher waits ``retry_delay * n`` seconds. Once every attempt has failed
    a FetchError is raised carrying the last failure.

    Example:
        async with PageFetcher() as fetcher:
            html = await fetcher.fetch("https://www.belleproperty.com/listings?pg=1")
    """

    source = "belle"

    def __init__(
        self,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the fetcher.

        Args:
            max_retries: Attempts per URL (default from settings, 3)
            retry_delay: Base backoff in seconds (default from settings, 1.0)
            timeout: Request timeout in seconds (default from settings, 30.0)
            client: Pre-built client to use instead of creating one. The
                    fetcher does not close clients it did not create.
        """
        self.max_retries = max_retries if max_retries is not None else config.max_retries
        self.retry_delay = retry_delay if retry_delay is not None else config.retry_delay
        self.timeout = timeout if timeout is not None else config.timeout
        self.headers = {
            "User-Agent": config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": config.accept_language,
            "Cache-Control": "no-cache",
        }
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        return self.retry_delay * attempt

    async def _backoff(self, attempt: int) -> None:
        """Wait before the attempt following failed attempt ``attempt``."""
        await asyncio.sleep(self.backoff_delay(attempt))

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` and return the response body.

        Raises:
            FetchError: If every attempt failed
        """
        client = await self._get_client()
        reason = "no attempts made"
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = await client.get(url, headers=self.headers)
                response.raise_for_status()
                return response.text

            except httpx.HTTPStatusError as e:
                reason = f"HTTP {e.response.status_code}: {e.response.reason_phrase}"
                last_error = e

            except httpx.HTTPError as e:
                reason = str(e) or type(e).__name__
                last_error = e

            logger.warning(
                f"Attempt {attempt}/{self.max_retries} failed for {url}: {reason}"
            )

            if attempt < self.max_retries:
                await self._backoff(attempt)

        raise FetchError(self.source, url, self.max_retries, reason) from last_error

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PageFetcher":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
