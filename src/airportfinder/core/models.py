from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class DistanceMode(str, Enum):
    """How proximity is measured."""

    STRAIGHT_LINE = "straight"
    DRIVING = "driving"

    def describe(self) -> str:
        if self is DistanceMode.DRIVING:
            return "Driving distance (OSRM routing)"
        return "Straight-line (Haversine formula)"


class Coordinate(BaseModel):
    """WGS-84 position in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    lon: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)

    def as_lon_lat(self) -> str:
        """Return ``"lon,lat"``, the ordering routing engines expect."""
        return f"{self.lon},{self.lat}"


class LocationCandidate(BaseModel):
    """A geocoder match the user may pick as search origin."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    coordinate: Coordinate

    @property
    def short_name(self) -> str:
        return self.display_name.split(",")[0].strip()

    @property
    def details(self) -> str:
        parts = self.display_name.split(",")[1:3]
        return ",".join(parts).strip()


class AirportRecord(BaseModel):
    """One commercial airport row from the OurAirports catalog.

    Text fields keep the dataset's values verbatim (already trimmed by the
    CSV parser); ``iata_code`` is the three letter code used for display.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    municipality: str = ""
    iso_country: str = ""
    type: str = Field(..., description="large_airport, medium_airport, ...")
    iata_code: str = ""
    coordinate: Coordinate

    def __repr__(self) -> str:  # pragma: no cover
        return f"AirportRecord({self.iata_code or self.id} {self.name!r})"


class RankedAirport(BaseModel):
    """An airport with its computed distance from the search origin."""

    model_config = ConfigDict(frozen=True)

    airport: AirportRecord
    distance_km: float = Field(..., ge=0.0)
    straight_line_km: Optional[float] = Field(
        None, description="Great-circle distance used for pre-filtering"
    )

    @property
    def name(self) -> str:
        return self.airport.name

    @property
    def iata_code(self) -> str:
        return self.airport.iata_code


class SearchRequest(BaseModel):
    """One user search: origin, radius in km and distance mode."""

    model_config = ConfigDict(frozen=True)

    origin: Coordinate
    radius_km: PositiveInt
    mode: DistanceMode = DistanceMode.STRAIGHT_LINE
