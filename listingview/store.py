"""Immutable snapshot of the listings published for one building."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from listingview.models import Listing

logger = logging.getLogger(__name__)


class ListingStore:
    """Ordered, read-only collection of listings keyed by id.

    The first occurrence of an id wins; later duplicates are dropped.
    A store is never mutated, so one instance can back any number of views.
    """

    def __init__(self, listings: Iterable[Listing] = ()):
        unique: dict[str, Listing] = {}
        for listing in listings:
            if listing.id in unique:
                logger.warning("Dropping duplicate listing id %s", listing.id)
                continue
            unique[listing.id] = listing
        self._by_id = unique
        self._listings: tuple[Listing, ...] = tuple(unique.values())

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> ListingStore:
        """Build a store from raw listing payloads."""
        return cls(Listing.model_validate(record) for record in records)

    @property
    def listings(self) -> tuple[Listing, ...]:
        return self._listings

    def get(self, listing_id: str) -> Listing | None:
        return self._by_id.get(str(listing_id))

    def __iter__(self) -> Iterator[Listing]:
        return iter(self._listings)

    def __len__(self) -> int:
        return len(self._listings)

    def __contains__(self, listing_id: object) -> bool:
        return str(listing_id) in self._by_id

    def __repr__(self) -> str:
        return f"ListingStore({len(self)} listings)"
