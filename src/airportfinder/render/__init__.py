"""Plain-text rendering of suggestions and search results."""

from .results import format_airport_location, format_results, format_suggestions

__all__ = ["format_airport_location", "format_results", "format_suggestions"]
