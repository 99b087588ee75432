"""OSRM road routing client.

Coordinates cross this boundary in ``lon,lat`` order, as OSRM expects. A
response without routes is a valid outcome and maps to ``None``.
"""

from __future__ import annotations

import asyncio
import logging
from math import isfinite
from typing import Any, Optional

import aiohttp

from airportfinder.core.errors import RoutingCallError
from airportfinder.core.models import Coordinate
from airportfinder.settings.values import HTTP, PROVIDERS

from .base import HttpProvider

__all__ = ["OsrmRouter"]

logger = logging.getLogger(__name__)


def _route_distance(data: Any) -> Optional[float]:
    if not isinstance(data, dict):
        return None
    routes = data.get("routes")
    if not isinstance(routes, list) or not routes:
        return None
    first = routes[0]
    if not isinstance(first, dict):
        return None
    dist = first.get("distance")
    if isinstance(dist, bool) or not isinstance(dist, (int, float)):
        return None
    # resp.json accepts NaN/Infinity literals
    if not isfinite(dist) or dist < 0:
        return None
    return float(dist)


class OsrmRouter(HttpProvider):
    """Driving distance between two points via the OSRM ``route`` service."""

    def __init__(
        self,
        url: str = PROVIDERS["routing"]["url"],
        *,
        timeout_s: float = float(HTTP["routing_timeout_s"]),
        **kwargs: Any,
    ) -> None:
        super().__init__(timeout_s=timeout_s, **kwargs)
        self._url = url.rstrip("/")

    def route_url(self, origin: Coordinate, destination: Coordinate) -> str:
        return f"{self._url}/{origin.as_lon_lat()};{destination.as_lon_lat()}"

    async def route_distance_m(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[float]:
        """Return the road distance in meters, or None when no route exists.

        Raises:
            RoutingCallError: On transport failure or non-success status.
        """
        url = self.route_url(origin, destination)
        try:
            async with self._session() as session:
                async with session.get(
                    url,
                    params={"overview": "false"},
                    headers=self._headers,
                    timeout=self._timeout,
                ) as resp:
                    if resp.status != 200:
                        raise RoutingCallError(f"routing HTTP {resp.status} for {url}")
                    data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise RoutingCallError(f"routing request failed: {e!r}") from e

        dist = _route_distance(data)
        if dist is None:
            logger.debug("No route from %s", url)
        return dist

    async def __call__(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[float]:
        return await self.route_distance_m(origin, destination)
