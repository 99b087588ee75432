"""Domain primitives: coordinates, records, errors and geo helpers."""
