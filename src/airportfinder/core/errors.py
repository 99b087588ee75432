"""Error taxonomy.

Every error carries a ``user_message`` that is safe to display. Provider
details stay in ``str(exc)`` and the logs.
"""

from __future__ import annotations

__all__ = [
    "AirportFinderError",
    "DatasetFetchError",
    "GeocodingError",
    "NoSelectionError",
    "RoutingCallError",
    "SearchFailure",
]


class AirportFinderError(Exception):
    user_message: str = "Something went wrong. Please try again."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.user_message)


class SearchFailure(AirportFinderError):
    """The single failure a search surfaces to its caller."""

    user_message = "Failed to search airports. Please try again."


class DatasetFetchError(AirportFinderError):
    user_message = "Failed to fetch airport data"


class RoutingCallError(AirportFinderError):
    """A routing request for one candidate failed; the ranker drops it."""

    user_message = "Failed to calculate driving distance"


class GeocodingError(AirportFinderError):
    user_message = "Failed to search locations. Please try again."


class NoSelectionError(AirportFinderError):
    """A search was requested without a resolved origin."""

    user_message = "Please select a location from the suggestions."
