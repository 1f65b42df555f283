"""Equality filters over building listings."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from functools import lru_cache
from typing import Any, Iterable

from pydantic import ConfigDict, TypeAdapter, ValidationError

from listingview.models import FilterSpec, Listing, resolve_field

logger = logging.getLogger(__name__)

# stands in for a filter value that cannot be a value of its field
_NO_MATCH = object()


@lru_cache(maxsize=None)
def _adapter(field: str) -> TypeAdapter:
    annotation = Listing.model_fields[field].annotation
    return TypeAdapter(annotation, config=ConfigDict(coerce_numbers_to_str=True))


def coerce_value(field: str, value: Any) -> Any:
    """Convert a raw filter value (usually a query string) to the field's type."""
    try:
        value = _adapter(field).validate_python(value)
    except ValidationError:
        logger.debug("Filter value %r cannot match field %r", value, field)
        return _NO_MATCH
    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def normalize_filters(filters: FilterSpec | None) -> dict[str, Any]:
    """Drop entries whose value is empty and map aliases to field names.

    Unknown names are kept as given; ``apply_filters`` ignores them.
    """
    if not filters:
        return {}
    return {resolve_field(name) or name: value for name, value in filters.items() if value}


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def _matches(listing: Listing, constraints: dict[str, Any]) -> bool:
    return all(_plain(getattr(listing, name)) == _plain(value) for name, value in constraints.items())


def apply_filters(listings: Iterable[Listing], filters: FilterSpec | None) -> list[Listing]:
    """Return the listings whose fields equal every non-empty filter value.

    Unknown field names are ignored. A value that cannot be converted to its
    field's type matches nothing. Relative order is preserved.
    """
    constraints = {}
    for name, value in normalize_filters(filters).items():
        field = resolve_field(name)
        if field is None:
            logger.debug("Ignoring filter on unknown field %r", name)
            continue
        constraints[field] = coerce_value(field, value)

    if not constraints:
        return list(listings)
    if any(value is _NO_MATCH for value in constraints.values()):
        return []
    return [listing for listing in listings if _matches(listing, constraints)]
