"""
Dataset and map-bounds loading.

Data lives either in a local directory or behind an HTTP base URL:

  <root>/map_bounds.json        {"<mode>": {"minLat": .., "maxLat": .., ...}, ...}
  <root>/cities/<mode>.json     [{"name": .., "country": .., "latitude": .., ...}, ...]

Neither loader raises. A missing or broken city file leaves the quiz with an
empty dataset; any bounds problem falls back to whole-world bounds.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from city_quiz.config import DataConfig, get_settings
from city_quiz.models import Bounds, CityRecord

logger = logging.getLogger(__name__)

_MODE_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class DataUnavailableError(Exception):
    """A dataset or bounds file could not be fetched or parsed."""


class DataSource:
    """
    Reads JSON documents relative to the configured data root.
    Uses HTTP when data_url is configured, the local data_dir otherwise.
    """

    def __init__(
        self,
        config: Optional[DataConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config or get_settings().data
        self._transport = transport

    @property
    def is_remote(self) -> bool:
        return bool(self.config.data_url)

    async def fetch_json(self, relative_path: str) -> Any:
        if self.is_remote:
            return await self._fetch_remote(relative_path)
        return await self._fetch_local(relative_path)

    async def _fetch_remote(self, relative_path: str) -> Any:
        url = f"{self.config.data_url.rstrip('/')}/{relative_path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout,
                transport=self._transport,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as e:
            raise DataUnavailableError(f"HTTP error fetching {url}: {e}") from e
        except ValueError as e:
            raise DataUnavailableError(f"Malformed JSON at {url}: {e}") from e

    async def _fetch_local(self, relative_path: str) -> Any:
        path = Path(self.config.data_dir) / relative_path
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
            return json.loads(text)
        except OSError as e:
            raise DataUnavailableError(f"Cannot read {path}: {e}") from e
        except ValueError as e:
            raise DataUnavailableError(f"Malformed JSON in {path}: {e}") from e


def _check_mode(mode: str) -> None:
    if not _MODE_RE.match(mode):
        raise DataUnavailableError(f"Invalid mode name: {mode!r}")


async def load_cities(mode: str, source: Optional[DataSource] = None) -> list[CityRecord]:
    """
    Load the city list for a mode, in file order.
    Rows that fail validation are skipped; a missing file gives [].
    """
    source = source or DataSource()
    try:
        _check_mode(mode)
        raw = await source.fetch_json(f"cities/{mode}.json")
        if not isinstance(raw, list):
            raise DataUnavailableError(f"City data for {mode!r} is not a list")
    except DataUnavailableError as e:
        logger.error("City dataset unavailable for mode %r, continuing with no cities: %s", mode, e)
        return []

    cities: list[CityRecord] = []
    skipped = 0
    for i, row in enumerate(raw):
        try:
            cities.append(CityRecord.model_validate(row))
        except ValidationError as e:
            skipped += 1
            logger.debug("Skipping city row %d in %s: %s", i, mode, e)

    if skipped:
        logger.warning("Skipped %d invalid city rows for mode %r", skipped, mode)
    logger.info("Loaded %d cities for mode %r", len(cities), mode)
    return cities


async def load_bounds(mode: str, source: Optional[DataSource] = None) -> Bounds:
    """Bounds for a mode; whole-world bounds whenever they cannot be determined."""
    source = source or DataSource()
    try:
        _check_mode(mode)
        all_bounds = await source.fetch_json(source.config.bounds_file)
    except DataUnavailableError as e:
        logger.error("Failed to load map bounds, using world defaults: %s", e)
        return Bounds.world()

    if not isinstance(all_bounds, dict) or mode not in all_bounds:
        logger.warning("No bounds found for mode %r, using world defaults", mode)
        return Bounds.world()

    try:
        bounds = Bounds.model_validate(all_bounds[mode])
    except ValidationError as e:
        logger.warning("Invalid bounds for mode %r, using world defaults: %s", mode, e)
        return Bounds.world()

    logger.info("Loaded bounds for mode %r: %s", mode, bounds)
    return bounds
