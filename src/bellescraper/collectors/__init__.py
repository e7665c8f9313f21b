"""Listing collection for Belle Property.

Main Components:
    - DataSource: Abstract base class for listing sources
    - BelleScraper: Paginated scraper for belleproperty.com search results
    - PageFetcher: HTTP fetcher with retry and linear backoff
    - parser: Field and page extraction from search result HTML

Example usage:
    from bellescraper.collectors import BelleScraper
    from bellescraper.models import ScraperOptions

    async with BelleScraper() as scraper:
        result = await scraper.scrape(ScraperOptions(state="VIC", limit=20))
"""

from .base import DataSource, DataSourceError, FetchError
from .belle import BelleScraper, scrape_by_state, scrape_listings
from .fetcher import PageFetcher

__all__ = [
    "DataSource",
    "DataSourceError",
    "FetchError",
    "BelleScraper",
    "PageFetcher",
    "scrape_listings",
    "scrape_by_state",
]
