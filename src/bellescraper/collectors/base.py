"""Abstract base class and errors for listing data sources.

This module defines the DataSource interface implemented by BelleScraper and
the exception types raised while talking to a remote listing catalog.

Example usage:
    class MySource(DataSource):
        name = "my_source"

        async def fetch_listings(self, region=None, property_type=None, limit=None):
            ...

        def is_available(self):
            return True
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.listing import ListingRecord


class DataSource(ABC):
    """Abstract base class for listing data sources.

    Attributes:
        name: Unique identifier for this data source (e.g., "belle")
    """

    name: str

    @abstractmethod
    async def fetch_listings(
        self,
        region: Optional[str] = None,
        property_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[ListingRecord]:
        """Fetch listings matching the given criteria.

        Args:
            region: Region code to filter by (e.g., "NSW")
            property_type: Category filter understood by the source
            limit: Maximum number of listings to return

        Returns:
            List of ListingRecord objects, possibly shorter than requested
            if the source became unreachable part way through.
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this data source is configured and available."""
        pass


class DataSourceError(Exception):
    """Base exception for data source errors.

    Attributes:
        source: Name of the data source that raised the error
        message: Error description
    """

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"[{source}] {message}")


class FetchError(DataSourceError):
    """Raised when a page could not be fetched after all retries.

    Attributes:
        url: The URL that failed
        attempts: Number of attempts made
    """

    def __init__(self, source: str, url: str, attempts: int, reason: str):
        self.url = url
        self.attempts = attempts
        self.reason = reason
        super().__init__(
            source, f"Failed to fetch {url} after {attempts} attempts: {reason}"
        )
