"""Price statistics over the filtered listings of a building."""

from __future__ import annotations

from statistics import fmean, median
from typing import Iterable, Sequence

from listingview.models import Listing, PriceStats, SeriesStats


def positive_values(values: Iterable[float | None]) -> list[float]:
    """Keep only known, strictly positive values."""
    return [v for v in values if v is not None and v > 0]


def summarize(values: Sequence[float]) -> SeriesStats | None:
    """Summarize a price series, or return ``None`` when it is empty."""
    if not values:
        return None
    return SeriesStats(
        count=len(values),
        minimum=min(values),
        maximum=max(values),
        mean=round(fmean(values), 2),
        median=median(values),
    )


def compute_stats(listings: Iterable[Listing]) -> PriceStats:
    """Compute total price and price-per-sqm statistics.

    Callers pass the whole filtered set; the result must not depend on which
    page is on screen.
    """
    rows = list(listings)
    total = positive_values(listing.price for listing in rows)
    per_sqm = positive_values(listing.price_per_sqm for listing in rows)
    return PriceStats(total=summarize(total), per_sqm=summarize(per_sqm))
