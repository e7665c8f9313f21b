"""Data models for bellescraper."""

from bellescraper.models.listing import (
    AUSTRALIAN_STATES,
    AustralianState,
    ListingRecord,
    PropertyType,
    ScraperOptions,
    ScraperResult,
    TraversalStatus,
)

__all__ = [
    "AUSTRALIAN_STATES",
    "AustralianState",
    "ListingRecord",
    "PropertyType",
    "ScraperOptions",
    "ScraperResult",
    "TraversalStatus",
]
