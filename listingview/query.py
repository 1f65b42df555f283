"""Translate query-string parameters into initial view state."""

from __future__ import annotations

from typing import Mapping, Optional

from listingview.models import DEFAULT_SORT, SortDirection, SortSpec
from listingview.store import ListingStore
from listingview.view.controller import BuildingView, PageCallback
from listingview.view.pagination import DEFAULT_PAGE_SIZE

QUERY_FILTER_FIELDS = ("category", "type", "rent_type")


def parse_page(value: Optional[str]) -> int:
    """1-based page number from a ``page`` parameter; anything unusable is page 1."""
    if not value:
        return 1
    try:
        return int(value.strip())
    except ValueError:
        return 1


def parse_sort(value: Optional[str]) -> SortSpec | None:
    """``price`` sorts ascending, ``-price`` descending. Empty means no preference."""
    if not value:
        return None
    if value.startswith("-"):
        return SortSpec(field=value[1:], direction=SortDirection.DESCENDING)
    return SortSpec(field=value, direction=SortDirection.ASCENDING)


def filters_from_query(params: Mapping[str, str]) -> dict[str, str]:
    return {name: params[name] for name in QUERY_FILTER_FIELDS if params.get(name)}


def view_from_query(
    store: ListingStore,
    params: Mapping[str, str],
    page_size: int = DEFAULT_PAGE_SIZE,
    default_sort: SortSpec | None = DEFAULT_SORT,
    on_page_change: Optional[PageCallback] = None,
) -> BuildingView:
    """Open a building view in the state described by ``params``."""
    return BuildingView(
        store,
        filters=filters_from_query(params),
        sort=parse_sort(params.get("sort")) or default_sort,
        page=parse_page(params.get("page")),
        page_size=page_size,
        on_page_change=on_page_change,
    )
