"""Text formatting for location suggestions and ranked airports."""

from __future__ import annotations

from typing import Sequence

from airportfinder.core.models import AirportRecord, LocationCandidate, RankedAirport

__all__ = ["format_airport_location", "format_results", "format_suggestions"]

EMPTY_TITLE = "No airports found"
EMPTY_HINT = "Try increasing the search radius or selecting a different location."


def format_suggestions(candidates: Sequence[LocationCandidate]) -> str:
    """Numbered list of geocoder matches (1-based, as ``--pick`` expects)."""
    lines: list[str] = []
    for i, cand in enumerate(candidates, start=1):
        line = f"{i}. {cand.short_name}"
        if cand.details:
            line += f" ({cand.details})"
        lines.append(line)
    return "\n".join(lines)


def format_airport_location(airport: AirportRecord) -> str:
    """``"Municipality, CC"``; the separator appears only when both exist."""
    parts = [p for p in (airport.municipality, airport.iso_country) if p]
    return ", ".join(parts)


def format_results(results: Sequence[RankedAirport]) -> str:
    lines = [f"{len(results)} found"]
    if not results:
        lines += ["", EMPTY_TITLE, EMPTY_HINT]
        return "\n".join(lines)

    width = len(str(len(results)))
    for i, r in enumerate(results, start=1):
        lines.append("")
        lines.append(f"{i:>{width}}. {r.name} [{r.iata_code}]")
        pad = " " * (width + 2)
        where = format_airport_location(r.airport)
        if where:
            lines.append(f"{pad}{where}")
        lines.append(f"{pad}{r.distance_km:.1f} km away")
    return "\n".join(lines)
