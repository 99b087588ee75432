"""Commercial airport selection from parsed catalog rows.

Schema
------
Rows come from the OurAirports ``airports.csv`` and are read through the
columns:
    - id, type, name, municipality, iso_country, iata_code
    - latitude_deg, longitude_deg (decimal degrees as text)

A row is kept when it has a three character IATA code, is a
``large_airport`` or ``medium_airport`` and carries finite coordinates.
Output preserves input order.
"""

from __future__ import annotations

import logging
from math import isfinite
from typing import Iterable, Mapping

from pydantic import ValidationError

from airportfinder.core.models import AirportRecord, Coordinate
from airportfinder.settings.values import RANKING

__all__ = ["COMMERCIAL_TYPES", "filter_commercial", "to_airport_record"]

logger = logging.getLogger(__name__)

COMMERCIAL_TYPES: frozenset[str] = frozenset(RANKING["commercial_types"])


def _coerce_float(v: object) -> float | None:
    if not isinstance(v, str) or not v.strip():
        return None
    try:
        f = float(v)
    except ValueError:
        return None
    return f if isfinite(f) else None


def to_airport_record(row: Mapping[str, str]) -> AirportRecord | None:
    """Build an AirportRecord from a catalog row, or None if unusable."""
    iata = row.get("iata_code", "")
    if len(iata) != 3:
        return None
    if row.get("type", "") not in COMMERCIAL_TYPES:
        return None
    lat = _coerce_float(row.get("latitude_deg"))
    lon = _coerce_float(row.get("longitude_deg"))
    if lat is None or lon is None:
        return None
    try:
        coordinate = Coordinate(lat=lat, lon=lon)
    except ValidationError:
        logger.debug("airport %s has out-of-range coordinates", row.get("id"))
        return None
    return AirportRecord(
        id=row.get("id", ""),
        name=row.get("name", ""),
        municipality=row.get("municipality", ""),
        iso_country=row.get("iso_country", ""),
        type=row["type"],
        iata_code=iata,
        coordinate=coordinate,
    )


def filter_commercial(rows: Iterable[Mapping[str, str]]) -> list[AirportRecord]:
    """Return the commercial airports among *rows*, in input order."""
    out: list[AirportRecord] = []
    for row in rows:
        rec = to_airport_record(row)
        if rec is not None:
            out.append(rec)
    return out
