"""Tests for listing filters."""

from datetime import datetime

from listingview.models import Listing, ListingType
from listingview.view.filtering import apply_filters, normalize_filters


def _make_listing(**overrides) -> Listing:
    defaults = {
        "id": "1",
        "category": "apartment",
        "type": "sale",
        "price": 100_000,
    }
    defaults.update(overrides)
    return Listing(**defaults)


def _listings() -> list[Listing]:
    return [
        _make_listing(id="1", category="apartment", type="sale"),
        _make_listing(id="2", category="house", type="rent", rent_type="monthly"),
        _make_listing(id="3", category="apartment", type="rent", rent_type="daily"),
        _make_listing(id="4", category="garage", type="sale"),
        _make_listing(id="5", category="apartment", type="rent", rent_type="monthly"),
    ]


def _ids(listings) -> list[str]:
    return [listing.id for listing in listings]


class TestNormalizeFilters:
    def test_drops_falsy_values(self):
        assert normalize_filters({"category": "", "type": None, "rent_type": "daily"}) == {"rent_type": "daily"}

    def test_none(self):
        assert normalize_filters(None) == {}


class TestApplyFilters:
    def test_empty_filters_return_everything_in_order(self):
        listings = _listings()
        assert _ids(apply_filters(listings, {})) == ["1", "2", "3", "4", "5"]
        assert _ids(apply_filters(listings, None)) == ["1", "2", "3", "4", "5"]

    def test_falsy_entries_do_not_constrain(self):
        result = apply_filters(_listings(), {"category": "", "type": None})
        assert len(result) == 5

    def test_single_constraint(self):
        result = apply_filters(_listings(), {"category": "apartment"})
        assert _ids(result) == ["1", "3", "5"]

    def test_all_constraints_must_match(self):
        result = apply_filters(_listings(), {"category": "apartment", "type": "rent"})
        assert _ids(result) == ["3", "5"]

    def test_rent_type_filter(self):
        result = apply_filters(_listings(), {"rent_type": "monthly"})
        assert _ids(result) == ["2", "5"]

    def test_exact_match_only(self):
        assert apply_filters(_listings(), {"category": "apart"}) == []
        assert apply_filters(_listings(), {"category": "Apartment"}) == []

    def test_enum_and_string_values_are_equal(self):
        by_enum = apply_filters(_listings(), {"type": ListingType.RENT})
        by_string = apply_filters(_listings(), {"type": "rent"})
        assert _ids(by_enum) == _ids(by_string) == ["2", "3", "5"]

    def test_unknown_fields_are_ignored(self):
        result = apply_filters(_listings(), {"colour": "blue", "category": "house"})
        assert _ids(result) == ["2"]

    def test_does_not_mutate_input(self):
        listings = _listings()
        apply_filters(listings, {"category": "garage"})
        assert len(listings) == 5

    def test_result_matches_exactly_the_satisfying_listings(self):
        listings = _listings()
        specs = [
            {"category": "apartment"},
            {"type": "sale"},
            {"category": "house", "type": "sale"},
            {"type": "rent", "rent_type": "monthly"},
        ]
        for spec in specs:
            result = apply_filters(listings, spec)
            for listing in listings:
                satisfies = all(
                    getattr(getattr(listing, k), "value", getattr(listing, k)) == v for k, v in spec.items()
                )
                assert (listing in result) == satisfies


class TestTypedFilterValues:
    def _listings(self) -> list[Listing]:
        return [
            _make_listing(id="1", rooms=3, price=120_000, area=72.5),
            _make_listing(id="2", rooms=2, price=95_000, area=50),
            _make_listing(id="10", rooms=3, price=150_000, published_at=datetime(2021, 1, 1)),
        ]

    def test_int_field_from_string(self):
        assert _ids(apply_filters(self._listings(), {"rooms": "3"})) == ["1", "10"]

    def test_float_fields_from_string(self):
        assert _ids(apply_filters(self._listings(), {"price": "95000"})) == ["2"]
        assert _ids(apply_filters(self._listings(), {"area": "72.5"})) == ["1"]

    def test_integer_id(self):
        assert _ids(apply_filters(self._listings(), {"id": 10})) == ["10"]

    def test_timestamp_from_string(self):
        assert _ids(apply_filters(self._listings(), {"published_at": "2021-01-01T00:00:00"})) == ["10"]

    def test_unconvertible_value_matches_nothing(self):
        assert apply_filters(self._listings(), {"rooms": "three"}) == []
        assert apply_filters(self._listings(), {"rent_type": "hourly"}) == []


class TestFieldAliases:
    def test_camel_case_filter(self):
        result = apply_filters(_listings(), {"rentType": "monthly"})
        assert _ids(result) == ["2", "5"]

    def test_normalize_maps_aliases(self):
        assert normalize_filters({"rentType": "daily", "pricePerSqm": ""}) == {"rent_type": "daily"}
