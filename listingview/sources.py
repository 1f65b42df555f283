"""Loading building listings from JSON files or the building API."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from listingview.config import SourceConfig
from listingview.store import ListingStore

logger = logging.getLogger(__name__)


class ListingSourceError(ValueError):
    """Raised when a payload does not contain a list of listings."""


def extract_records(payload: Any) -> list[dict[str, Any]]:
    """Find the listing records in a decoded payload.

    Accepts a bare list, a paginated ``{"results": [...]}`` page, or a building
    object carrying its listings under ``properties.results``.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        properties = payload.get("properties")
        if isinstance(properties, dict) and isinstance(properties.get("results"), list):
            return properties["results"]
        if isinstance(payload.get("results"), list):
            return payload["results"]
    raise ListingSourceError("Payload has no listing results")


def load_file(path: Path) -> ListingStore:
    """Read a building payload from a local JSON file."""
    with open(path, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ListingSourceError(f"{path} is not valid JSON: {e}") from e
    store = ListingStore.from_records(extract_records(payload))
    logger.info("Loaded %d listings from %s", len(store), path)
    return store


class BuildingClient:
    """Fetches building payloads over HTTP."""

    def __init__(self, config: SourceConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/json",
                },
                timeout=self.config.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def fetch(self, url: str) -> ListingStore:
        client = await self._get_client()
        resp = await client.get(url)
        resp.raise_for_status()
        try:
            payload = resp.json()
        except json.JSONDecodeError as e:
            raise ListingSourceError(f"{url} did not return JSON: {e}") from e
        store = ListingStore.from_records(extract_records(payload))
        logger.info("Fetched %d listings from %s", len(store), url)
        return store

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def load_listings(source: str, config: SourceConfig) -> ListingStore:
    """Load a store from a file path or an http(s) URL."""
    if not is_url(source):
        return load_file(Path(source))

    client = BuildingClient(config)
    try:
        return await client.fetch(source)
    finally:
        await client.close()
