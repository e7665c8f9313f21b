"""Belle Property web scraper data source.

This module implements a scraper for belleproperty.com search results. Pages
are fetched one at a time with httpx and parsed with BeautifulSoup; the
pagination loop is driven by the "next" link each page declares.

A scrape never raises on network failure: if a page cannot be fetched after
retries, traversal stops and whatever was collected so far is returned.
"""

import asyncio
import logging
from typing import Any, Optional, Union

import httpx
from bs4 import BeautifulSoup

from ..config import config
from ..models.listing import (
    AustralianState,
    ListingRecord,
    ScraperOptions,
    ScraperResult,
)
from .base import DataSource, FetchError
from .fetcher import PageFetcher
from .parser import get_next_page_number, get_total_listings, parse_listings_page
from .traversal import (
    TraversalState,
    add_listings,
    advance_page,
    record_fetch_failure,
    start_traversal,
)

logger = logging.getLogger(__name__)


class BelleScraper(DataSource):
    """Web scraper for Belle Property residential listings.

    Attributes:
        name: "belle"

    Example:
        async with BelleScraper() as scraper:
            result = await scraper.scrape(ScraperOptions(state="NSW", limit=50))
            print(result.total_listings, result.total_pages)
    """

    name = "belle"

    def __init__(
        self,
        request_delay: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
        listings_url: Optional[str] = None,
    ):
        """Initialize the Belle Property scraper.

        Args:
            request_delay: Seconds between page requests (default 1.0)
            max_retries: Fetch attempts per page (default 3)
            retry_delay: Base backoff between attempts (default 1.0)
            timeout: Request timeout in seconds (default 30.0)
            client: Optional pre-built httpx client (e.g. with a mock transport)
            listings_url: Search endpoint override
        """
        self.request_delay = (
            request_delay if request_delay is not None else config.request_delay
        )
        self.listings_url = listings_url or config.listings_url
        self.fetcher = PageFetcher(
            max_retries=max_retries,
            retry_delay=retry_delay,
            timeout=timeout,
            client=client,
        )

    def build_url(self, page: int, options: ScraperOptions) -> str:
        """Build the search URL for ``page`` with the caller's filters."""
        params = {
            "pg": str(page),
            "searchStatus": "buy",
            "propertyType": "residential",
            "sort": "newold",
            "state": options.state.value.lower() if options.state else "all",
        }
        if options.property_type:
            params["ptype"] = options.property_type

        # Keep any query string already present in the configured endpoint
        return str(httpx.URL(self.listings_url).copy_merge_params(params))

    async def _pause(self) -> None:
        """Be respectful - wait between page requests."""
        await asyncio.sleep(self.request_delay)

    async def _scrape_page(
        self, state: TraversalState, options: ScraperOptions
    ) -> TraversalState:
        """Run one iteration of the scrape loop."""
        url = self.build_url(state.page, options)
        logger.info(f"Fetching page {state.page}: {url}")

        try:
            html = await self.fetcher.fetch(url)
        except FetchError as e:
            logger.error(f"Error fetching page {state.page}: {e.reason}")
            return record_fetch_failure(state)

        soup = BeautifulSoup(html, "html.parser")
        page_listings = parse_listings_page(soup)
        logger.info(f"Found {len(page_listings)} listings on page {state.page}")
        if state.page == 1 and logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Site reports about {get_total_listings(soup)} listings")

        state = add_listings(state, page_listings, options.limit)
        if not state.is_running:
            logger.info(f"Reached limit of {options.limit} listings")
            return state

        return advance_page(state, get_next_page_number(soup))

    async def scrape(self, options: Optional[ScraperOptions] = None) -> ScraperResult:
        """Scrape listings page by page until a stop condition.

        Traversal stops when the limit is reached, when a page has no "next"
        link, or when a page cannot be fetched after retries. In the last case
        listings from earlier pages are still returned.

        Args:
            options: Region/category filters and result limit

        Returns:
            ScraperResult with the listings, the highest page number seen,
            the listing count and the terminal traversal status
        """
        options = options or ScraperOptions()

        logger.info("Starting Belle Property scraper...")
        if options.state:
            logger.info(f"Filtering by state: {options.state.value}")
        if options.property_type:
            logger.info(f"Filtering by type: {options.property_type}")
        if options.limit:
            logger.info(f"Limit: {options.limit} listings")

        state = start_traversal()
        while True:
            state = await self._scrape_page(state, options)
            if not state.is_running:
                break
            await self._pause()

        logger.info(
            f"Scraping complete ({state.status.value}). "
            f"Total listings: {len(state.listings)}"
        )

        return ScraperResult(
            listings=list(state.listings),
            total_pages=state.watermark,
            total_listings=len(state.listings),
            status=state.status,
        )

    async def scrape_by_region(
        self,
        region: Union[AustralianState, str],
        limit: Optional[int] = None,
    ) -> list[ListingRecord]:
        """Scrape listings for a single state or territory."""
        result = await self.scrape(ScraperOptions(state=region, limit=limit))
        return result.listings

    async def fetch_listings(
        self,
        region: Optional[str] = None,
        property_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[ListingRecord]:
        """Fetch listings through the DataSource interface."""
        options = ScraperOptions(state=region, property_type=property_type, limit=limit)
        result = await self.scrape(options)
        return result.listings

    def is_available(self) -> bool:
        """Belle Property needs no credentials, so it is always available."""
        return True

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self.fetcher.close()

    async def __aenter__(self) -> "BelleScraper":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()


async def scrape_listings(options: Optional[ScraperOptions] = None) -> ScraperResult:
    """Scrape Belle Property listings with a short-lived scraper."""
    async with BelleScraper() as scraper:
        return await scraper.scrape(options)


async def scrape_by_state(
    state: Union[AustralianState, str], limit: Optional[int] = None
) -> list[ListingRecord]:
    """Scrape listings for one state with a short-lived scraper."""
    async with BelleScraper() as scraper:
        return await scraper.scrape_by_region(state, limit)
