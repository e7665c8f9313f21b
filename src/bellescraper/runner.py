"""CLI runner for one-off scrapes.

Run via: python -m bellescraper.runner --state NSW --limit 20
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .collectors.belle import BelleScraper
from .models.listing import (
    AUSTRALIAN_STATES,
    ScraperOptions,
    ScraperResult,
    TraversalStatus,
)

console = Console()
log_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=log_console, rich_tracebacks=True)],
        force=True,
    )


def render_table(result: ScraperResult) -> Table:
    """Build a Rich table of scraped listings."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Address")
    table.add_column("Price", justify="right")
    table.add_column("Bed", justify="right")
    table.add_column("Bath", justify="right")
    table.add_column("Car", justify="right")
    table.add_column("Type")
    table.add_column("Status")

    def _count(value: Optional[int]) -> str:
        return "-" if value is None else str(value)

    for listing in result.listings:
        table.add_row(
            listing.address,
            listing.price,
            _count(listing.bedrooms),
            _count(listing.bathrooms),
            _count(listing.cars),
            listing.property_type.value,
            listing.status,
        )
    return table


async def run_scrape(options: ScraperOptions) -> ScraperResult:
    """Run a single scrape with default settings."""
    async with BelleScraper() as scraper:
        return await scraper.scrape(options)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Belle Property listing scraper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m bellescraper.runner
  python -m bellescraper.runner --state VIC --limit 50
  python -m bellescraper.runner --state nsw --type house --json > listings.json
        """,
    )

    parser.add_argument(
        "--state",
        help=f"Filter by state ({', '.join(s.value for s in AUSTRALIAN_STATES)})",
    )
    parser.add_argument(
        "--type",
        dest="property_type",
        help="Filter by property category (sent as ptype)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Maximum number of listings to collect",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a table",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        options = ScraperOptions(
            state=args.state,
            property_type=args.property_type,
            limit=args.limit,
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            log_console.print(f"[red]Invalid --{field}: {error['msg']}[/red]")
        return 2

    try:
        result = asyncio.run(run_scrape(options))
    except KeyboardInterrupt:
        log_console.print("\n[yellow]Interrupted[/yellow]")
        return 130

    if args.json:
        console.print_json(result.model_dump_json())
    else:
        console.print(render_table(result))
        console.print()
        console.print(
            f"[bold]{result.total_listings} listings across "
            f"{result.total_pages} page(s) ({result.status.value})[/bold]"
        )

    if result.status is TraversalStatus.FETCH_FAILED and not result.listings:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
