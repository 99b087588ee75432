"""HTTP clients for the geocoding, routing and airport dataset services."""

from .nominatim import NominatimGeocoder
from .osrm import OsrmRouter
from .ourairports import OurAirportsDataset

__all__ = ["NominatimGeocoder", "OsrmRouter", "OurAirportsDataset"]
