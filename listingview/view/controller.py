"""Stateful view over one building's listings.

Owns the filter, sort and page state of a single building table and keeps the
derived page, statistics and page metadata in sync with it.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from listingview.models import (
    DEFAULT_SORT,
    FilterSpec,
    Listing,
    PriceStats,
    SortDirection,
    SortSpec,
    ViewSnapshot,
    resolve_field,
)
from listingview.store import ListingStore
from listingview.view.aggregation import compute_stats
from listingview.view.filtering import apply_filters, normalize_filters
from listingview.view.pagination import DEFAULT_PAGE_SIZE, paginate
from listingview.view.sorting import apply_sort, canonical_sort, next_sort

logger = logging.getLogger(__name__)

PageCallback = Callable[[int], None]


class BuildingView:
    """Filter -> sort -> {stats, page} pipeline for one building view.

    Args:
        store: Listings of the building. Never modified.
        filters: Initial filter constraints, handled exactly like ``set_filters``
            except that nothing is emitted.
        sort: Initial sort key; ``None`` keeps store order.
        page: Initial 1-based page number, e.g. from a ``?page=`` parameter.
        page_size: Rows per page.
        on_page_change: Called with the effective 1-based page number whenever
            a page is requested or a recompute moves the current page.
    """

    def __init__(
        self,
        store: ListingStore,
        filters: FilterSpec | None = None,
        sort: SortSpec | None = DEFAULT_SORT,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_page_change: Optional[PageCallback] = None,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._store = store
        self._filters = normalize_filters(filters)
        self._sort = canonical_sort(sort)
        self._page_size = page_size
        self._page_index = page - 1
        self._on_page_change = on_page_change

        self._ordered: list[Listing] = []
        self._stats = PriceStats()
        self._snapshot = ViewSnapshot()
        self._refresh()

    @property
    def store(self) -> ListingStore:
        return self._store

    @property
    def filters(self) -> dict:
        return dict(self._filters)

    @property
    def sort(self) -> SortSpec | None:
        return self._sort

    @property
    def page_size(self) -> int:
        return self._page_size

    def sort_direction(self, field: str) -> SortDirection | None:
        """Direction shown on the ``field`` column header, if it is sorted."""
        field = resolve_field(field) or field
        if self._sort is not None and self._sort.field == field:
            return self._sort.direction
        return None

    @property
    def snapshot(self) -> ViewSnapshot:
        return self._snapshot

    @property
    def page_rows(self) -> list[Listing]:
        return self._snapshot.page_rows

    @property
    def stats(self) -> PriceStats:
        return self._snapshot.stats

    @property
    def page_count(self) -> int:
        return self._snapshot.page_count

    @property
    def page_index(self) -> int:
        return self._snapshot.page_index

    @property
    def page_number(self) -> int:
        return self._snapshot.page_number

    @property
    def total(self) -> int:
        return self._snapshot.total

    def set_filters(self, filters: FilterSpec | None) -> ViewSnapshot:
        """Replace all filters and go back to the first page."""
        previous = self.page_index
        self._filters = normalize_filters(filters)
        self._page_index = 0
        self._refresh()
        if self.page_index != previous:
            self._emit_page()
        return self._snapshot

    def set_sort(self, field: str) -> ViewSnapshot:
        """Toggle the sort state of ``field``; the current page is kept."""
        if resolve_field(field) is None:
            logger.warning("Cannot sort by unknown field %r", field)
            return self._snapshot
        self._sort = next_sort(self._sort, field)
        logger.debug("Sort is now %s", self._sort)
        self._refresh()
        return self._snapshot

    def request_page(self, index: int) -> ViewSnapshot:
        """Show the zero-based page ``index``, clamped to the existing pages."""
        self._page_index = index
        self._repage()
        self._emit_page()
        return self._snapshot

    def goto_page(self, number: int) -> ViewSnapshot:
        """Show the 1-based page ``number``."""
        return self.request_page(number - 1)

    def set_page_size(self, page_size: int) -> ViewSnapshot:
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        previous = self.page_index
        self._page_size = page_size
        self._repage()
        if self.page_index != previous:
            self._emit_page()
        return self._snapshot

    def replace_store(self, store: ListingStore) -> ViewSnapshot:
        """Swap in a fresh snapshot of the building's listings."""
        previous = self.page_index
        self._store = store
        self._refresh()
        if self.page_index != previous:
            self._emit_page()
        return self._snapshot

    def _refresh(self) -> None:
        filtered = apply_filters(self._store, self._filters)
        self._ordered = apply_sort(filtered, self._sort)
        self._stats = compute_stats(self._ordered)
        self._repage()

    def _repage(self) -> None:
        page = paginate(self._ordered, self._page_size, self._page_index)
        self._page_index = page.index
        self._snapshot = ViewSnapshot(
            page_rows=page.rows,
            stats=self._stats,
            page_count=page.page_count,
            page_index=page.index,
            total=len(self._ordered),
        )

    def _emit_page(self) -> None:
        if self._on_page_change is not None:
            self._on_page_change(self.page_number)
