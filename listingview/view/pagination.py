"""Fixed-size page windows over an ordered sequence of listings."""

from __future__ import annotations

import math
from typing import Sequence

from listingview.models import Listing, Page

DEFAULT_PAGE_SIZE = 15


def page_count(total: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(total / page_size)


def clamp_index(requested: int, count: int) -> int:
    """Clamp a zero-based page index into ``[0, max(count - 1, 0)]``."""
    return min(max(requested, 0), max(count - 1, 0))


def paginate(
    listings: Sequence[Listing],
    page_size: int = DEFAULT_PAGE_SIZE,
    requested_index: int = 0,
) -> Page:
    """Cut the page at ``requested_index`` out of ``listings``.

    Stale or out-of-range indices (for example after a filter narrowed the
    results) are clamped to the nearest existing page instead of failing.
    """
    count = page_count(len(listings), page_size)
    index = clamp_index(requested_index, count)
    start = index * page_size
    return Page(rows=list(listings[start:start + page_size]), page_count=count, index=index)
