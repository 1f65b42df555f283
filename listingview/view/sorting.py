"""Single-column ordering of listings.

Missing values rank below every present value, whatever the field: they come
first in ascending order and last in descending order. For ``published_at``
this means undated ads read as the oldest ones. Digit-only strings such as
listing ids order by their numeric value and before any other text.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable

from listingview.models import Listing, SortDirection, SortSpec, resolve_field

logger = logging.getLogger(__name__)


def sort_key(field: str):
    """Build a key function for ``field`` that ranks ``None`` lowest."""

    def key(listing: Listing) -> tuple[Any, ...]:
        value = getattr(listing, field)
        if value is None:
            return (0,)
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, str):
            if value.isdecimal():
                return (1, 0, int(value))
            return (1, 1, value)
        return (1, 0, value)

    return key


def canonical_sort(sort: SortSpec | None) -> SortSpec | None:
    """Same sort with an aliased field name replaced by the attribute name."""
    if sort is None:
        return None
    field = resolve_field(sort.field)
    if field is None or field == sort.field:
        return sort
    return SortSpec(field=field, direction=sort.direction)


def apply_sort(listings: Iterable[Listing], sort: SortSpec | None) -> list[Listing]:
    """Stable sort of ``listings`` by the active key.

    With no active key, or a key that is not a listing field, the input order
    is kept.
    """
    rows = list(listings)
    if sort is None:
        return rows
    field = resolve_field(sort.field)
    if field is None:
        logger.debug("Ignoring sort on unknown field %r", sort.field)
        return rows
    # sorted() keeps equal keys in input order for reverse=True as well
    return sorted(rows, key=sort_key(field), reverse=sort.descending)


def next_sort(current: SortSpec | None, field: str) -> SortSpec | None:
    """Advance the header toggle for ``field``.

    unsorted -> ascending -> descending -> unsorted. Picking another column
    discards the previous one and starts the new column at ascending.
    """
    field = resolve_field(field) or field
    current = canonical_sort(current)
    if current is None or current.field != field:
        return SortSpec(field=field, direction=SortDirection.ASCENDING)
    if current.direction == SortDirection.ASCENDING:
        return SortSpec(field=field, direction=SortDirection.DESCENDING)
    return None
