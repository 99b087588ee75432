"""Proximity ranking of airport candidates around an origin.

Straight-line mode is a pure Haversine filter and sort. Driving mode first
narrows the candidates by straight-line distance (radius times a buffer,
capped to the closest ``max_routed``), then asks the routing collaborator
for each one in turn. Routing calls are strictly sequential and paced by a
fixed delay; a failed or route-less call drops only that candidate.
"""

from __future__ import annotations

import logging
from math import isfinite
from typing import Awaitable, Callable, Optional, Sequence

from airportfinder.core.geo import haversine_km, meters_to_km
from airportfinder.core.models import (
    AirportRecord,
    Coordinate,
    DistanceMode,
    RankedAirport,
)
from airportfinder.core.time import RealTimeSource, TimeSource
from airportfinder.settings.values import RANKING

__all__ = ["RoutingFn", "rank", "rank_driving", "rank_straight_line"]

logger = logging.getLogger(__name__)

# (origin, destination) -> route length in meters, or None when unreachable
RoutingFn = Callable[[Coordinate, Coordinate], Awaitable[Optional[float]]]


def _straight_line_km(origin: Coordinate, airport: AirportRecord) -> float:
    c = airport.coordinate
    return haversine_km(origin.lat, origin.lon, c.lat, c.lon)


def rank_straight_line(
    origin: Coordinate, radius_km: float, candidates: Sequence[AirportRecord]
) -> list[RankedAirport]:
    """Airports within *radius_km* great-circle distance, nearest first.

    Ties keep their input order.
    """
    scored: list[RankedAirport] = []
    for ap in candidates:
        d = _straight_line_km(origin, ap)
        if d <= radius_km:
            scored.append(RankedAirport(airport=ap, distance_km=d, straight_line_km=d))
    scored.sort(key=lambda r: r.distance_km)
    return scored


async def rank_driving(
    origin: Coordinate,
    radius_km: float,
    candidates: Sequence[AirportRecord],
    routing_fn: RoutingFn,
    *,
    buffer: float = float(RANKING["driving_buffer"]),
    max_routed: int = int(RANKING["max_routed_candidates"]),
    delay_s: float = float(RANKING["routing_delay_s"]),
    time_source: Optional[TimeSource] = None,
) -> list[RankedAirport]:
    """Airports within *radius_km* road distance, nearest first.

    Parameters
    ----------
    origin: Coordinate
        Search origin.
    radius_km: float
        Maximum driving distance in kilometers.
    candidates: Sequence[AirportRecord]
        Airports to consider.
    routing_fn: RoutingFn
        Awaitable returning the route length in meters or None.
    buffer: float
        Straight-line pre-filter is ``radius_km * buffer``.
    max_routed: int
        At most this many (closest) candidates are routed.
    delay_s: float
        Pause before each routing call after the first.
    time_source: TimeSource
        Clock used for the pause; defaults to real time.
    """
    clock = time_source or RealTimeSource()
    limit = radius_km * buffer

    nearby: list[tuple[float, AirportRecord]] = []
    for ap in candidates:
        d = _straight_line_km(origin, ap)
        if d <= limit:
            nearby.append((d, ap))
    nearby.sort(key=lambda t: t[0])
    nearby = nearby[: max(0, int(max_routed))]
    if not nearby:
        return []

    logger.info(
        "Routing %d candidate(s) within %.1f km straight-line", len(nearby), limit
    )
    results: list[RankedAirport] = []
    for i, (straight_km, ap) in enumerate(nearby):
        if i > 0 and delay_s > 0:
            await clock.sleep(delay_s)
        try:
            meters = await routing_fn(origin, ap.coordinate)
            if meters is None:
                logger.info("No driving route to %s", ap.name)
                continue
            if not isfinite(meters) or meters < 0:
                logger.warning("Unusable route length %r for %s", meters, ap.name)
                continue
            km = meters_to_km(meters)
            ranked = RankedAirport(
                airport=ap, distance_km=km, straight_line_km=straight_km
            )
        except Exception:  # noqa: BLE001
            logger.warning(
                "Failed to calculate driving distance for %s", ap.name, exc_info=True
            )
            continue
        if ranked.distance_km <= radius_km:
            results.append(ranked)

    results.sort(key=lambda r: r.distance_km)
    return results


async def rank(
    origin: Coordinate,
    radius_km: float,
    mode: DistanceMode,
    candidates: Sequence[AirportRecord],
    routing_fn: Optional[RoutingFn] = None,
    *,
    buffer: float = float(RANKING["driving_buffer"]),
    max_routed: int = int(RANKING["max_routed_candidates"]),
    delay_s: float = float(RANKING["routing_delay_s"]),
    time_source: Optional[TimeSource] = None,
) -> list[RankedAirport]:
    """Rank *candidates* around *origin* using the requested distance mode.

    The keyword-only options apply to driving mode only; see
    :func:`rank_driving`.

    Raises:
        ValueError: Driving mode was requested without a routing function.
    """
    if mode is DistanceMode.DRIVING:
        if routing_fn is None:
            raise ValueError("driving mode requires a routing function")
        return await rank_driving(
            origin,
            radius_km,
            candidates,
            routing_fn,
            buffer=buffer,
            max_routed=max_routed,
            delay_s=delay_s,
            time_source=time_source,
        )
    return rank_straight_line(origin, radius_km, candidates)
