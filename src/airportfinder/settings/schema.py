"""Pydantic model for user settings."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from airportfinder.core.models import DistanceMode

from .values import HTTP, PROVIDERS, RANKING, SEARCH


class FinderSettings(BaseModel):
    """Search defaults and provider endpoints.

    Parameters
    ----------
    radius_km: Default search radius in kilometers.
    mode: Default distance mode (``straight`` or ``driving``).
    geocoder_url, routing_url, dataset_url: Provider endpoints.
    user_agent: Sent with every provider request.
    timeout_s: Total timeout for geocoding and dataset requests.
    routing_timeout_s: Total timeout for one routing request.
    driving_buffer: Multiplier applied to the radius when pre-filtering
        candidates by straight-line distance before routing.
    max_routed_candidates: Upper bound on routing calls per search.
    routing_delay_s: Fixed pause between consecutive routing calls.
    """

    radius_km: int = Field(default=int(SEARCH["default_radius_km"]))
    mode: DistanceMode = Field(default=DistanceMode(SEARCH["default_mode"]))

    geocoder_url: str = Field(default=PROVIDERS["geocoder"]["url"])
    geocoder_limit: int = Field(default=int(PROVIDERS["geocoder"]["limit"]))
    min_query_length: int = Field(
        default=int(PROVIDERS["geocoder"]["min_query_length"])
    )
    routing_url: str = Field(default=PROVIDERS["routing"]["url"])
    dataset_url: str = Field(default=PROVIDERS["dataset"]["url"])

    user_agent: str = Field(default=HTTP["user_agent"])
    timeout_s: float = Field(default=float(HTTP["timeout_s"]))
    routing_timeout_s: float = Field(default=float(HTTP["routing_timeout_s"]))

    driving_buffer: float = Field(default=float(RANKING["driving_buffer"]))
    max_routed_candidates: int = Field(
        default=int(RANKING["max_routed_candidates"])
    )
    routing_delay_s: float = Field(default=float(RANKING["routing_delay_s"]))

    @field_validator("radius_km", "geocoder_limit", "max_routed_candidates")
    @classmethod
    def _chk_positive_int(cls, v: int) -> int:  # pragma: no cover - trivial
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("timeout_s", "routing_timeout_s")
    @classmethod
    def _chk_timeout(cls, v: float) -> float:  # pragma: no cover - trivial
        if v <= 0:
            raise ValueError("timeouts must be > 0 (seconds)")
        return v

    @field_validator("driving_buffer")
    @classmethod
    def _chk_buffer(cls, v: float) -> float:
        if v < 1.0:
            raise ValueError("driving_buffer must be >= 1.0")
        return v

    @field_validator("routing_delay_s")
    @classmethod
    def _chk_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("routing_delay_s must be >= 0 (seconds)")
        return v
