"""Pytest fixtures and test utilities."""

import asyncio
from typing import Optional, Union

import httpx
import pytest

from bellescraper.collectors.belle import BelleScraper
from bellescraper.models.listing import ScraperOptions, ScraperResult


def make_card(
    href: Optional[str] = "/buy/nsw/paddington/house/123",
    suburb: str = "Paddington",
    street: str = "12 Glenmore Road",
    price: str = "$1,250,000",
    bed: str = "3",
    bath: str = "2",
    car: str = "1",
    status: str = "",
    image: Optional[str] = "https://cdn.belleproperty.com/photo-123.jpg",
    image_link: bool = True,
) -> str:
    """HTML for one ``.property-item`` card."""
    image_attr = f' data-swiper-image="{image}"' if image else ""
    image_href = f'<a href="{href}"></a>' if (href and image_link) else ""
    suburb_link = (
        f'<a href="{href}">{suburb}</a>' if href else f"<span>{suburb}</span>"
    )
    return f"""
    <div class="property-item">
      <div class="image"{image_attr}>{image_href}</div>
      <div class="status">{status}</div>
      <div class="details">
        <div class="suburb">{suburb_link}</div>
        <div class="address">{street}</div>
        <div class="price">{price}</div>
        <div class="features">
          <span class="feature bed">{bed}</span>
          <span class="feature bath">{bath}</span>
          <span class="feature car">{car}</span>
        </div>
      </div>
    </div>
    """


def make_page(
    cards: list[str],
    next_href: Optional[str] = None,
    next_disabled: bool = False,
    results_text: Optional[str] = None,
) -> str:
    """HTML for a search results page."""
    counter = f'<div class="results-count">{results_text}</div>' if results_text else ""
    nav = ""
    if next_href is not None:
        disabled = ' class="disabled"' if next_disabled else ""
        nav = (
            '<div class="navigation">'
            f'<span class="next"><a href="{next_href}"{disabled}>Next</a></span>'
            "</div>"
        )
    return f"""
    <html><body>
      {counter}
      <div class="listings">{''.join(cards)}</div>
      {nav}
    </body></html>
    """


def numbered_cards(start: int, count: int) -> list[str]:
    """``count`` distinct cards numbered from ``start``."""
    return [
        make_card(href=f"/buy/vic/richmond/house/{n}", street=f"{n} Swan Street")
        for n in range(start, start + count)
    ]


PageResponse = Union[str, int, Exception]


class FakeSite:
    """Mock Belle Property site served through httpx.MockTransport.

    ``pages`` maps a page number to the HTML to serve, an HTTP status code to
    fail with, or an exception to raise. A list value is consumed one entry
    per request, which lets a page fail a few times before succeeding.
    """

    def __init__(self, pages: dict[int, Union[PageResponse, list[PageResponse]]]):
        self.pages = pages
        self.requests: list[httpx.Request] = []

    @property
    def requested_pages(self) -> list[int]:
        return [int(r.url.params["pg"]) for r in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        page = int(request.url.params.get("pg", "1"))
        response = self.pages.get(page, 404)
        if isinstance(response, list):
            response = response.pop(0) if len(response) > 1 else response[0]

        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return httpx.Response(response, text="error")
        return httpx.Response(200, text=response)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


def run_scrape(
    site: FakeSite,
    options: Optional[ScraperOptions] = None,
    **kwargs,
) -> ScraperResult:
    """Run a full scrape against ``site`` with all delays disabled."""

    async def _run() -> ScraperResult:
        async with site.client() as client:
            kwargs.setdefault("request_delay", 0)
            kwargs.setdefault("retry_delay", 0)
            scraper = BelleScraper(client=client, **kwargs)
            return await scraper.scrape(options)

    return asyncio.run(_run())


@pytest.fixture
def card_html() -> str:
    """A complete listing card."""
    return make_card()


@pytest.fixture
def three_page_site() -> FakeSite:
    """Pages 1 -> 2 -> 3, with page 3 showing a disabled next link."""
    return FakeSite(
        {
            1: make_page(numbered_cards(1, 2), next_href="/listings?pg=2"),
            2: make_page(numbered_cards(3, 2), next_href="/listings?pg=3"),
            3: make_page(
                numbered_cards(5, 2), next_href="/listings?pg=4", next_disabled=True
            ),
        }
    )
