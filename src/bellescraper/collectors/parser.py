"""HTML parsing for Belle Property search result pages.

Belle Property renders its listings server-side. Each result is a
``div.property-item`` card with this structure:

- ``.image`` wraps the photo link; its ``data-swiper-image`` attribute holds
  the primary photo URL
- ``.suburb > a`` links to the listing, with the suburb as link text
- ``.address`` = street address (absent for some listings)
- ``.price`` = price text ("$1,250,000", "Sold", "Auction", ...)
- ``.feature.bed`` / ``.feature.bath`` / ``.feature.car`` = counts
- ``.status`` = marketing badge ("FIRST TO SEE", "Market Preview", ...)

Pagination lives in ``.navigation .next a`` whose href carries ``pg=<n>``.

All functions here are pure: the same document always yields the same
records.
"""

import logging
import re
from typing import Callable, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..config import config
from ..models.listing import ListingRecord, PropertyType

logger = logging.getLogger(__name__)

Document = Union[str, BeautifulSoup]

LISTING_SELECTOR = ".property-item"
NEXT_PAGE_SELECTOR = ".navigation .next a"
RESULTS_COUNT_SELECTOR = ".results-count, .listing-count"

DEFAULT_PRICE = "Contact Agent"
DEFAULT_STATUS = "For Sale"

_LEADING_INT_RE = re.compile(r"^[+-]?\d+")
_UNIT_NUMBER_RE = re.compile(r"^\d+/\d+")
_PAGE_PARAM_RE = re.compile(r"pg=(\d+)")
_FIRST_NUMBER_RE = re.compile(r"(\d+)")

# (predicate(href, address), type) pairs evaluated in order; first match wins.
# Both arguments are lowercased before the rules run.
PropertyTypeRule = tuple[Callable[[str, str], bool], PropertyType]

PROPERTY_TYPE_RULES: list[PropertyTypeRule] = [
    (
        lambda href, address: bool(_UNIT_NUMBER_RE.match(address)) or "unit" in address,
        PropertyType.UNIT,
    ),
    (lambda href, address: "lot " in address, PropertyType.LAND),
    (
        lambda href, address: "apartment" in href or "apartment" in address,
        PropertyType.APARTMENT,
    ),
]


def _as_soup(document: Document) -> BeautifulSoup:
    if isinstance(document, BeautifulSoup):
        return document
    return BeautifulSoup(document, "html.parser")


def _text(node: Tag, selector: str) -> str:
    """Concatenated, trimmed text of every element matching ``selector``."""
    return "".join(el.get_text() for el in node.select(selector)).strip()


def _attr(node: Tag, selector: str, name: str) -> Optional[str]:
    """Attribute of the first element matching ``selector``."""
    el = node.select_one(selector)
    if el is None:
        return None
    value = el.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def _to_int(digits: str) -> Optional[int]:
    """Convert a digit run, or None if Python refuses the conversion."""
    try:
        return int(digits)
    except ValueError:
        return None


def parse_feature_value(text: str) -> Optional[int]:
    """Parse a bed/bath/car count.

    Leading integer only ("3 beds" -> 3). Empty or non-numeric text gives
    None rather than zero.
    """
    trimmed = text.strip()
    if not trimmed:
        return None
    match = _LEADING_INT_RE.match(trimmed)
    return _to_int(match.group(0)) if match else None


def infer_property_type(href: str, address: str) -> PropertyType:
    """Guess the property type from the listing link and address."""
    href_lower = href.lower()
    address_lower = address.lower()
    for predicate, property_type in PROPERTY_TYPE_RULES:
        if predicate(href_lower, address_lower):
            return property_type
    return PropertyType.HOUSE


def resolve_url(href: str, base_url: Optional[str] = None) -> str:
    """Absolutise a listing href against the site origin."""
    if href.startswith("http"):
        return href
    return f"{base_url or config.base_url}{href}"


def extract_listing(card: Tag) -> Optional[ListingRecord]:
    """Parse a single ``.property-item`` card.

    Returns None when the card has no link to the listing; such cards
    cannot be identified and are skipped.
    """
    link_href = _attr(card, ".image a", "href") or _attr(card, ".suburb a", "href")
    if not link_href:
        logger.debug("Skipping listing card without a link")
        return None

    url = resolve_url(link_href)

    # Street is optional; suburb always comes from the link text
    suburb = _text(card, ".suburb > a")
    street = _text(card, ".address")
    address = f"{street}, {suburb}" if street else suburb

    price = _text(card, ".price") or DEFAULT_PRICE

    bedrooms = parse_feature_value(_text(card, ".feature.bed"))
    bathrooms = parse_feature_value(_text(card, ".feature.bath"))
    cars = parse_feature_value(_text(card, ".feature.car"))

    # Price text wins over the status badge
    status = _text(card, ".status") or DEFAULT_STATUS
    price_lower = price.lower()
    if "sold" in price_lower:
        status = "Sold"
    elif "leased" in price_lower:
        status = "Leased"

    property_type = infer_property_type(link_href, address)

    images: list[str] = []
    main_image = _attr(card, ".image", "data-swiper-image")
    if main_image:
        images.append(main_image)

    return ListingRecord(
        address=address,
        price=price,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        cars=cars,
        property_type=property_type,
        status=status,
        images=images,
        url=url,
    )


def parse_listings_page(document: Document) -> list[ListingRecord]:
    """Extract every listing on a search results page, in page order."""
    soup = _as_soup(document)
    listings = []
    for card in soup.select(LISTING_SELECTOR):
        listing = extract_listing(card)
        if listing is not None:
            listings.append(listing)
    return listings


def _next_link(soup: BeautifulSoup) -> Optional[Tag]:
    links = soup.select(NEXT_PAGE_SELECTOR)
    if not links:
        return None
    if any("disabled" in (link.get("class") or []) for link in links):
        return None
    return links[0]


def has_next_page(document: Document) -> bool:
    """True if the page has an enabled "next" pagination link."""
    return _next_link(_as_soup(document)) is not None


def get_next_page_number(document: Document) -> Optional[int]:
    """Page number targeted by the "next" link, or None.

    A missing link, a disabled link and an href without ``pg=<n>`` all mean
    there is no next page.
    """
    link = _next_link(_as_soup(document))
    if link is None:
        return None

    href = link.get("href")
    if not href:
        return None

    match = _PAGE_PARAM_RE.search(href)
    if not match:
        return None

    # Pages are 1-based; pg=0 is not a real page
    page = _to_int(match.group(1))
    if page is None or page < 1:
        return None
    return page


def get_total_listings(document: Document) -> int:
    """Total listing count from the results counter.

    Without a counter this falls back to the number of cards on this page,
    which is only a lower bound on the real total.
    """
    soup = _as_soup(document)
    results_text = _text(soup, RESULTS_COUNT_SELECTOR)
    match = _FIRST_NUMBER_RE.search(results_text)
    if match:
        total = _to_int(match.group(1))
        if total is not None:
            return total

    return len(soup.select(LISTING_SELECTOR))
