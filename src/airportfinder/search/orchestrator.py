"""Search pipeline: fetch dataset, parse, filter, rank.

Every step runs to completion before the next one starts. Any failure in
the pipeline is logged with its traceback and surfaced as a single
:class:`SearchFailure` whose message is safe to show to users.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from airportfinder.core.errors import NoSelectionError, SearchFailure
from airportfinder.core.models import (
    DistanceMode,
    LocationCandidate,
    RankedAirport,
    SearchRequest,
)
from airportfinder.core.time import TimeSource
from airportfinder.data.airports import filter_commercial
from airportfinder.data.csv_table import parse_csv_table
from airportfinder.settings.schema import FinderSettings

from .ranker import RoutingFn, rank

__all__ = ["DatasetFetcher", "search", "selection_to_request"]

logger = logging.getLogger(__name__)

DatasetFetcher = Callable[[], Awaitable[str]]


def selection_to_request(
    selection: Optional[LocationCandidate],
    radius_km: int,
    mode: DistanceMode = DistanceMode.STRAIGHT_LINE,
) -> SearchRequest:
    """Build a SearchRequest from the location the user picked.

    Raises:
        NoSelectionError: No location has been selected.
    """
    if selection is None:
        raise NoSelectionError()
    return SearchRequest(origin=selection.coordinate, radius_km=radius_km, mode=mode)


async def search(
    request: Optional[SearchRequest],
    dataset_fetcher: DatasetFetcher,
    routing_fn: Optional[RoutingFn] = None,
    *,
    settings: Optional[FinderSettings] = None,
    time_source: Optional[TimeSource] = None,
) -> list[RankedAirport]:
    """Run one airport search.

    The dataset is fetched once per call; nothing is cached or retried.

    Raises:
        NoSelectionError: *request* is None (no origin resolved).
        ValueError: Driving mode without a routing function.
        SearchFailure: Fetching, parsing, filtering or ranking failed.
    """
    if request is None:
        raise NoSelectionError("search requested without an origin")
    if request.mode is DistanceMode.DRIVING and routing_fn is None:
        raise ValueError("driving mode requires a routing function")
    cfg = settings or FinderSettings()

    try:
        csv_text = await dataset_fetcher()
        rows = parse_csv_table(csv_text)
        airports = filter_commercial(rows)
        logger.info(
            "Catalog: %d rows, %d commercial airports", len(rows), len(airports)
        )
        results = await rank(
            request.origin,
            request.radius_km,
            request.mode,
            airports,
            routing_fn,
            buffer=cfg.driving_buffer,
            max_routed=cfg.max_routed_candidates,
            delay_s=cfg.routing_delay_s,
            time_source=time_source,
        )
    except Exception as e:
        logger.exception("Airport search error")
        raise SearchFailure() from e

    logger.info(
        "Found %d airport(s) within %d km (%s)",
        len(results),
        request.radius_km,
        request.mode.value,
    )
    return results
