"""Data models for ListingView."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class ListingType(str, Enum):
    SALE = "sale"
    RENT = "rent"


class RentType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


# field name -> required value; falsy values mean "unconstrained"
FilterSpec = Mapping[str, Any]


class Listing(BaseModel):
    """A classified ad published for a unit in a building.

    Zero or missing ``price_per_sqm`` and ``area`` both mean "unknown" and are
    stored as ``None``. ``published_at`` is ``None`` for ads published before
    dates were recorded.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    category: str
    type: ListingType
    rent_type: Optional[RentType] = Field(
        default=None, validation_alias=AliasChoices("rent_type", "rentType")
    )
    price: float = Field(ge=0)
    price_per_sqm: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("price_per_sqm", "pricePerSqm")
    )
    area: Optional[float] = None
    rooms: Optional[int] = None
    published_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("published_at", "publishedAt")
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_rent_type_for_sales(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("type") != ListingType.RENT:
            data = {k: v for k, v in data.items() if k not in ("rent_type", "rentType")}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("price_per_sqm", "area")
    @classmethod
    def _unknown_when_not_positive(cls, value: Optional[float]) -> Optional[float]:
        if value is None or value <= 0:
            return None
        return value

    @field_validator("published_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # naive and aware timestamps must stay comparable when sorting
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_rent(self) -> bool:
        return self.type == ListingType.RENT


def _listing_field_names() -> dict[str, str]:
    names: dict[str, str] = {}
    for name, info in Listing.model_fields.items():
        names[name] = name
        alias = info.validation_alias
        choices = alias.choices if isinstance(alias, AliasChoices) else [alias]
        for choice in choices:
            if isinstance(choice, str):
                names[choice] = name
    return names


# payload names (snake_case and camelCase aliases) -> Listing attribute
LISTING_FIELD_NAMES = _listing_field_names()


def resolve_field(name: str) -> Optional[str]:
    """Attribute name for a listing field given by name or alias, if it exists."""
    return LISTING_FIELD_NAMES.get(name)


class SortSpec(BaseModel):
    """The single active sort key of a view."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASCENDING

    @property
    def descending(self) -> bool:
        return self.direction == SortDirection.DESCENDING


DEFAULT_SORT = SortSpec(field="published_at", direction=SortDirection.DESCENDING)


class SeriesStats(BaseModel):
    """Summary of one price series."""

    count: int
    minimum: float
    maximum: float
    mean: float
    median: float


class PriceStats(BaseModel):
    """Price statistics for the filtered listings.

    A series is ``None`` when no listing has a positive value for it.
    """

    total: Optional[SeriesStats] = None
    per_sqm: Optional[SeriesStats] = None

    @property
    def has_data(self) -> bool:
        return self.total is not None or self.per_sqm is not None


class Page(BaseModel):
    """One window of listings and the page metadata it was cut with."""

    rows: list[Listing] = Field(default_factory=list)
    page_count: int = 0
    index: int = 0


class ViewSnapshot(BaseModel):
    """Everything a renderer needs for one state of a building view."""

    page_rows: list[Listing] = Field(default_factory=list)
    stats: PriceStats = Field(default_factory=PriceStats)
    page_count: int = 0
    page_index: int = 0
    total: int = 0

    @property
    def page_number(self) -> int:
        return self.page_index + 1

    @property
    def has_results(self) -> bool:
        return len(self.page_rows) > 0
