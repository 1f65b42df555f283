"""Terminal rendering of a building view with rich."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from listingview.config import DisplayConfig
from listingview.models import Listing, PriceStats, SeriesStats, SortDirection
from listingview.view.controller import BuildingView

RENT_TYPE_SUFFIX = {
    "yearly": "/y",
    "monthly": "/m",
    "weekly": "/w",
    "daily": "/d",
}

# (header, listing field); rent_type is only shown as the price suffix
COLUMNS = [
    ("Category", "category"),
    ("Type", "type"),
    ("Total price", "price"),
    ("SQM Price", "price_per_sqm"),
    ("Area", "area"),
    ("Rooms", "rooms"),
    ("Published at", "published_at"),
]

_SORT_MARKERS = {SortDirection.ASCENDING: " ▲", SortDirection.DESCENDING: " ▼"}


def format_price(listing: Listing, display: DisplayConfig) -> str:
    text = f"{listing.price:,.0f} {display.currency}"
    if listing.is_rent and listing.rent_type is not None:
        text += RENT_TYPE_SUFFIX[listing.rent_type.value]
    return text


def format_sqm_price(listing: Listing, display: DisplayConfig) -> str:
    if not listing.price_per_sqm:
        return ""
    return f"{round(listing.price_per_sqm):,} {display.currency}/m²"


def format_area(listing: Listing) -> str:
    if not listing.area:
        return ""
    return f"{listing.area:,g} m²"


def format_published(listing: Listing, display: DisplayConfig) -> str:
    if listing.published_at is None:
        return display.undated_label
    return listing.published_at.strftime(display.date_format)


def _cells(listing: Listing, display: DisplayConfig) -> list[str]:
    return [
        listing.category,
        listing.type.value,
        format_price(listing, display),
        format_sqm_price(listing, display),
        format_area(listing),
        "" if listing.rooms is None else str(listing.rooms),
        format_published(listing, display),
    ]


def build_table(view: BuildingView, display: DisplayConfig) -> Table:
    """Table of the current page, with sort markers on the active column."""
    table = Table(show_lines=False)
    for header, field in COLUMNS:
        direction = view.sort_direction(field)
        marker = _SORT_MARKERS[direction] if direction else ""
        justify = "left" if field in ("category", "type") else "right"
        table.add_column(header + marker, justify=justify)

    for listing in view.page_rows:
        table.add_row(*_cells(listing, display))

    if not view.page_rows:
        table.add_row(
            "[bold]No classifieds could be found with the given filters.[/bold] "
            "Clear the filters or open a different property to see data.",
            *[""] * (len(COLUMNS) - 1),
        )
    return table


def _series_lines(title: str, series: SeriesStats | None, unit: str) -> list[str]:
    if series is None:
        return [f"[bold]{title}[/bold]: no data"]
    return [
        f"[bold]{title}[/bold] ({series.count} listings)",
        f"  min {series.minimum:,.0f}{unit} | median {series.median:,.0f}{unit} | "
        f"avg {series.mean:,.0f}{unit} | max {series.maximum:,.0f}{unit}",
    ]


def build_stats_panel(stats: PriceStats, display: DisplayConfig) -> Panel:
    lines = _series_lines("Total price", stats.total, f" {display.currency}")
    lines += _series_lines("Price per m²", stats.per_sqm, f" {display.currency}/m²")
    return Panel("\n".join(lines), title="Prices")


def build_footer(view: BuildingView) -> Text:
    if view.page_count <= 1:
        return Text(f"{view.total} listings", style="dim")
    return Text(f"Page {view.page_number} of {view.page_count} · {view.total} listings", style="dim")


def render_view(view: BuildingView, display: DisplayConfig) -> Group:
    """Stats panel (only when there are rows), page table and footer."""
    parts = []
    if view.snapshot.has_results:
        parts.append(build_stats_panel(view.stats, display))
    parts.append(build_table(view, display))
    parts.append(build_footer(view))
    return Group(*parts)
