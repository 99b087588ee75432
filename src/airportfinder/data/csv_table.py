"""Minimal CSV reader for the OurAirports catalog.

The catalog quotes text fields and never embeds newlines inside them, so
a line-oriented tokenizer is sufficient:

- lines are split on ``\\n``; the first line is the header
- a double quote toggles quoted mode; inside quotes commas are literal
- every field is trimmed of surrounding whitespace (which also removes a
  trailing ``\\r`` from CRLF input)

Known limitation: a doubled quote inside a quoted field is not unescaped.
Each quote character only toggles the mode and is discarded, so a quoted
field holding the word hi wrapped in doubled quotes parses as plain hi.
"""

from __future__ import annotations

from typing import Iterator

__all__ = ["parse_csv_table", "split_fields"]


def split_fields(line: str) -> list[str]:
    """Split one CSV line into trimmed fields."""
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    values.append("".join(current).strip())
    return values


def _iter_rows(headers: list[str], lines: list[str]) -> Iterator[dict[str, str]]:
    for line in lines:
        values = split_fields(line)
        # Short rows: trailing empty fields may be omitted by the source
        row = {
            header: (values[i] if i < len(values) else "")
            for i, header in enumerate(headers)
        }
        if not row.get(headers[0]):
            continue
        yield row


def parse_csv_table(text: str) -> list[dict[str, str]]:
    """Parse delimited text into one mapping per data row.

    Rows whose first (id) column is empty are dropped, which also skips
    blank lines at the end of the file.

    Parameters
    ----------
    text: str
        Full CSV text including the header line.

    Returns
    -------
    list[dict[str, str]]
        Records keyed by header name; missing fields map to ``""``.
    """
    lines = text.split("\n")
    headers = [h.replace('"', "").strip() for h in split_fields(lines[0])]
    if not headers or not headers[0]:
        return []
    return list(_iter_rows(headers, lines[1:]))
