"""Listing and scraper I/O data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, PositiveInt, field_validator


class PropertyType(str, Enum):
    """Inferred type of a residential listing."""

    HOUSE = "House"
    UNIT = "Unit"
    APARTMENT = "Apartment"
    LAND = "Land"


class AustralianState(str, Enum):
    """State/territory codes accepted as a region filter."""

    NSW = "NSW"
    VIC = "VIC"
    QLD = "QLD"
    WA = "WA"
    SA = "SA"
    TAS = "TAS"
    ACT = "ACT"
    NT = "NT"


AUSTRALIAN_STATES: list[AustralianState] = list(AustralianState)


class TraversalStatus(str, Enum):
    """Pagination loop state. RUNNING is the only non-terminal value."""

    RUNNING = "running"
    LIMIT_REACHED = "limit_reached"
    NO_MORE_PAGES = "no_more_pages"
    FETCH_FAILED = "fetch_failed"


class ListingRecord(BaseModel):
    """One Belle Property catalog entry.

    Every required field is populated (possibly with a default such as
    "Contact Agent" or "For Sale"). Feature counts are None when the card
    does not show them.
    """

    # Location
    address: str = Field(..., description="Street and suburb, or suburb only")

    # Pricing
    price: str = Field(..., description="Price text as displayed")

    # Features
    bedrooms: int | None = Field(default=None, description="Number of bedrooms")
    bathrooms: int | None = Field(default=None, description="Number of bathrooms")
    cars: int | None = Field(default=None, description="Number of car spaces")

    property_type: PropertyType = Field(
        default=PropertyType.HOUSE, description="Heuristically inferred type"
    )
    status: str = Field(default="For Sale", description="Listing status")

    images: list[str] = Field(default_factory=list, description="Image URLs")
    url: str = Field(..., description="Absolute URL to the listing")

    model_config = {
        "validate_assignment": True,
    }


class ScraperOptions(BaseModel):
    """Filters and limits for one scrape run."""

    state: AustralianState | None = Field(
        default=None, description="Region filter (state/territory code)"
    )
    property_type: str | None = Field(
        default=None, description="Category filter, sent as ptype"
    )
    limit: PositiveInt | None = Field(
        default=None, description="Maximum number of listings to collect"
    )

    @field_validator("state", mode="before")
    @classmethod
    def _normalise_state(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper() or None
        return value


class ScraperResult(BaseModel):
    """Outcome of a scrape run.

    ``total_pages`` is the highest page number seen during traversal.
    ``status`` records why traversal stopped; a fetch failure shows up here
    and in a shorter listing sequence, never as a raised exception.
    """

    listings: list[ListingRecord] = Field(default_factory=list)
    total_pages: int = Field(default=1, ge=1)
    total_listings: int = Field(default=0, ge=0)
    status: TraversalStatus = Field(default=TraversalStatus.NO_MORE_PAGES)
