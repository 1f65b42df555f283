"""Configuration management for ListingView."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from listingview.models import SortDirection, SortSpec

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).parent.parent / "config"


class ViewConfig(BaseModel):
    page_size: int = Field(default=15, gt=0)
    default_sort_field: str = "published_at"
    default_sort_descending: bool = True

    @property
    def default_sort(self) -> SortSpec:
        direction = SortDirection.DESCENDING if self.default_sort_descending else SortDirection.ASCENDING
        return SortSpec(field=self.default_sort_field, direction=direction)


class SourceConfig(BaseModel):
    timeout: float = 30.0
    user_agent: str = "listingview/0.1"


class DisplayConfig(BaseModel):
    currency: str = "€"
    undated_label: str = "Before 2018"
    date_format: str = "%Y-%m-%d %H:%M"


class AppConfig(BaseSettings):
    """Top-level settings.

    Built directly, values also come from LISTINGVIEW_<SECTION>__<KEY> environment
    variables; values passed in (e.g. from the TOML files) take precedence.
    """

    model_config = SettingsConfigDict(env_prefix="LISTINGVIEW_", env_nested_delimiter="__")

    view: ViewConfig = ViewConfig()
    source: SourceConfig = SourceConfig()
    display: DisplayConfig = DisplayConfig()


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay ``override`` on ``base``; nested sections merge key by key."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        data = tomllib.load(f)
    logger.debug("Read settings from %s", path)
    return data


def load_config(config_path: Path | None = None) -> AppConfig:
    """Build the view settings.

    ``config/default.toml`` holds the shipped page size, default sort and
    display labels. A custom path, or ``config/local.toml`` when none is
    given, overrides individual keys of it. Missing files are skipped.
    """
    data: dict[str, Any] = {}
    for path in (CONFIG_DIR / "default.toml", config_path or CONFIG_DIR / "local.toml"):
        if path.exists():
            data = _deep_merge(data, _read_toml(path))
    return AppConfig(**data)
