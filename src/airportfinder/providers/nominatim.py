"""Nominatim (OpenStreetMap) geocoding client.

Resolves a free-text place query to at most ``limit`` location candidates.
Queries shorter than ``min_query_length`` characters never hit the network.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError

from airportfinder.core.errors import GeocodingError
from airportfinder.core.models import Coordinate, LocationCandidate
from airportfinder.settings.values import PROVIDERS

from .base import HttpProvider

__all__ = ["NominatimGeocoder"]

logger = logging.getLogger(__name__)


def _to_candidate(item: Any) -> Optional[LocationCandidate]:
    if not isinstance(item, dict):
        return None
    name = item.get("display_name")
    if not isinstance(name, str) or not name.strip():
        return None
    try:
        coordinate = Coordinate(lat=float(item["lat"]), lon=float(item["lon"]))
    except (KeyError, TypeError, ValueError, ValidationError):
        return None
    return LocationCandidate(display_name=name, coordinate=coordinate)


class NominatimGeocoder(HttpProvider):
    """Free-text place search against a Nominatim ``/search`` endpoint."""

    def __init__(
        self,
        url: str = PROVIDERS["geocoder"]["url"],
        *,
        limit: int = int(PROVIDERS["geocoder"]["limit"]),
        min_query_length: int = int(PROVIDERS["geocoder"]["min_query_length"]),
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._url = url
        self._limit = int(limit)
        self._min_query_length = int(min_query_length)

    async def geocode(self, query: str) -> list[LocationCandidate]:
        """Return location candidates for *query*, best match first.

        An empty list means no match (or a query too short to send).

        Raises:
            GeocodingError: The service is unreachable or answered with a
                non-success status or an unexpected payload.
        """
        q = query.strip()
        if len(q) < self._min_query_length:
            return []

        params = {
            "q": q,
            "format": "json",
            "limit": str(self._limit),
            "addressdetails": "1",
        }
        try:
            async with self._session() as session:
                async with session.get(
                    self._url,
                    params=params,
                    headers=self._headers,
                    timeout=self._timeout,
                ) as resp:
                    if resp.status != 200:
                        raise GeocodingError(f"geocoder HTTP {resp.status} for {q!r}")
                    data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise GeocodingError(f"geocoder request failed: {e!r}") from e

        if not isinstance(data, list):
            raise GeocodingError(f"geocoder returned {type(data).__name__}")

        out: list[LocationCandidate] = []
        for item in data:
            cand = _to_candidate(item)
            if cand is None:
                logger.debug("Skipping unusable geocoder entry: %r", item)
                continue
            out.append(cand)
        logger.info("Geocoded %r to %d candidate(s)", q, len(out))
        return out
