"""Pagination state machine for a scrape run.

The loop state is an immutable TraversalState. Each step of the scrape loop
produces a new state from the previous one plus what the page yielded, so
every transition can be exercised without touching the network:

    RUNNING --add_listings (limit hit)------> LIMIT_REACHED
    RUNNING --advance_page (None)-----------> NO_MORE_PAGES
    RUNNING --advance_page (n)--------------> RUNNING (page = n)
    RUNNING --record_fetch_failure----------> FETCH_FAILED
"""

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from ..models.listing import ListingRecord, TraversalStatus


@dataclass(frozen=True)
class TraversalState:
    """Snapshot of the scrape loop.

    Attributes:
        page: Page number to fetch next (1-based)
        watermark: Highest page number seen so far
        listings: Records accumulated across pages
        status: RUNNING until a terminal state is reached
    """

    page: int = 1
    watermark: int = 1
    listings: tuple[ListingRecord, ...] = ()
    status: TraversalStatus = TraversalStatus.RUNNING

    @property
    def is_running(self) -> bool:
        return self.status is TraversalStatus.RUNNING


def start_traversal() -> TraversalState:
    """Initial state: page 1, nothing collected."""
    return TraversalState()


def add_listings(
    state: TraversalState,
    page_listings: Iterable[ListingRecord],
    limit: Optional[int] = None,
) -> TraversalState:
    """Append one page's listings, stopping at ``limit``.

    Listings are appended one at a time. If the limit is reached part way
    through the page the rest of the page is dropped and the state becomes
    LIMIT_REACHED.
    """
    if not state.is_running:
        return state

    accumulated = list(state.listings)
    for listing in page_listings:
        accumulated.append(listing)
        if limit and len(accumulated) >= limit:
            return replace(
                state,
                listings=tuple(accumulated),
                status=TraversalStatus.LIMIT_REACHED,
            )

    return replace(state, listings=tuple(accumulated))


def advance_page(state: TraversalState, next_page: Optional[int]) -> TraversalState:
    """Move to the page the current page declared as "next".

    None ends traversal with NO_MORE_PAGES. Any other value becomes the page
    to fetch, which need not be ``page + 1``; the watermark only ever grows.
    """
    if not state.is_running:
        return state

    if next_page is None:
        return replace(state, status=TraversalStatus.NO_MORE_PAGES)

    return replace(
        state,
        page=next_page,
        watermark=max(state.watermark, next_page),
    )


def record_fetch_failure(state: TraversalState) -> TraversalState:
    """End traversal after a failed fetch, keeping what was collected."""
    if not state.is_running:
        return state
    return replace(state, status=TraversalStatus.FETCH_FAILED)
