"""Tests for data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from listingview.models import (
    DEFAULT_SORT,
    Listing,
    ListingType,
    PriceStats,
    RentType,
    SortDirection,
    ViewSnapshot,
)


def test_listing_creation():
    listing = Listing(
        id="42",
        category="apartment",
        type="rent",
        rent_type="monthly",
        price=1_200,
        price_per_sqm=15.5,
        area=80,
        rooms=3,
        published_at="2021-03-04T10:00:00+00:00",
    )
    assert listing.type == ListingType.RENT
    assert listing.rent_type == RentType.MONTHLY
    assert listing.is_rent
    assert listing.published_at == datetime(2021, 3, 4, 10, tzinfo=timezone.utc)


def test_listing_defaults():
    listing = Listing(id="1", category="house", type="sale", price=250_000)
    assert listing.rent_type is None
    assert listing.price_per_sqm is None
    assert listing.area is None
    assert listing.rooms is None
    assert listing.published_at is None
    assert not listing.is_rent


def test_zero_numbers_are_unknown():
    listing = Listing(id="1", category="house", type="sale", price=0, price_per_sqm=0, area=0)
    assert listing.price == 0
    assert listing.price_per_sqm is None
    assert listing.area is None


def test_rent_type_dropped_for_sale():
    listing = Listing(id="1", category="house", type="sale", rent_type="monthly", price=100)
    assert listing.rent_type is None


def test_camel_case_payload():
    listing = Listing.model_validate(
        {
            "id": 7,
            "category": "apartment",
            "type": "rent",
            "rentType": "daily",
            "price": 50,
            "pricePerSqm": 2.5,
            "publishedAt": "2020-01-01T00:00:00",
        }
    )
    assert listing.id == "7"
    assert listing.rent_type == RentType.DAILY
    assert listing.price_per_sqm == 2.5
    assert listing.published_at.tzinfo is not None


def test_negative_price_rejected():
    with pytest.raises(ValidationError):
        Listing(id="1", category="house", type="sale", price=-1)


def test_unknown_type_rejected():
    with pytest.raises(ValidationError):
        Listing(id="1", category="house", type="swap", price=1)


def test_listing_is_frozen():
    listing = Listing(id="1", category="house", type="sale", price=1)
    with pytest.raises(ValidationError):
        listing.price = 2


def test_default_sort():
    assert DEFAULT_SORT.field == "published_at"
    assert DEFAULT_SORT.direction == SortDirection.DESCENDING
    assert DEFAULT_SORT.descending


def test_empty_snapshot():
    snapshot = ViewSnapshot()
    assert snapshot.page_number == 1
    assert not snapshot.has_results
    assert snapshot.stats == PriceStats()
    assert not snapshot.stats.has_data
