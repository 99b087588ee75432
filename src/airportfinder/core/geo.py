"""Great-circle helpers on a spherical Earth.

All angles are in degrees. Distances are in kilometers and rounded half-up
to one decimal place, which is the precision shown to users and the one
the ranker compares against the requested radius.
"""

from __future__ import annotations

from math import atan2, cos, floor, radians, sin, sqrt

__all__ = [
    "EARTH_RADIUS_KM",
    "haversine_km",
    "meters_to_km",
    "round_tenth",
]


EARTH_RADIUS_KM: float = 6371.0  # mean Earth radius


def round_tenth(value: float) -> float:
    """Round to one decimal place, halves going up.

    ``round()`` uses banker's rounding, so 0.25 would become 0.2; distances
    here must round 0.25 to 0.3.
    """
    return floor(value * 10.0 + 0.5) / 10.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers, rounded to one decimal.

    Args:
        lat1: Latitude of point 1 in degrees.
        lon1: Longitude of point 1 in degrees.
        lat2: Latitude of point 2 in degrees.
        lon2: Longitude of point 2 in degrees.
    Returns:
        Distance along the sphere of radius 6371 km.
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dphi = radians(lat2 - lat1)
    dlambda = radians(lon2 - lon1)

    # haversine(a) = sin^2(dphi/2) + cos(phi1)cos(phi2)sin^2(dlambda/2)
    sdphi = sin(dphi * 0.5)
    sdl = sin(dlambda * 0.5)
    a = sdphi * sdphi + cos(phi1) * cos(phi2) * sdl * sdl
    # Clamp due to rounding
    a = min(1.0, max(0.0, a))
    c = 2.0 * atan2(sqrt(a), sqrt(1.0 - a))
    return round_tenth(EARTH_RADIUS_KM * c)


def meters_to_km(meters: float) -> float:
    """Convert a route length in meters to kilometers (one decimal)."""
    return round_tenth(float(meters) / 1000.0)
