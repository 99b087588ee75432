"""Airport catalog parsing and filtering."""

from .airports import COMMERCIAL_TYPES, filter_commercial
from .csv_table import parse_csv_table

__all__ = [
    "COMMERCIAL_TYPES",
    "filter_commercial",
    "parse_csv_table",
]
