"""Portfolio series loading and normalization helpers."""

from __future__ import annotations

import datetime
import logging
import math
import re
from typing import Any, Iterable

import pandas as pd

from models import DataPoint

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv",)

# A quoted token (may hold thousands separators) or a bare run up to the next comma.
_TOKEN_PATTERN = re.compile(r'(".*?"|[^",\s]+)(?=\s*,|\s*$)')
_VALUE_PATTERN = re.compile(r"[+-]?(?P<digits>\d+)")
_INDEX_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_MAX_VALUE_DIGITS = 18


class SeriesParseError(ValueError):
    """Raised in strict mode for a line that permissive parsing would drop."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"Line {line_number}: {reason}: {line!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


def tokenize_line(line: str) -> list[str]:
    """Return the recognized field tokens of one CSV line."""
    return _TOKEN_PATTERN.findall(line)


def _clean_number(token: str) -> str:
    return token.replace('"', "").replace(",", "").strip()


def parse_date_token(token: str) -> datetime.date | None:
    """Resolve a YYYY/MM/DD token to a date, or None when it is not a real date."""
    parts = token.replace('"', "").strip().split("/")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
        return datetime.date(year, month, day)
    except (ValueError, OverflowError):
        return None


def parse_value_token(token: str) -> int | None:
    """Parse a portfolio value, truncating any fractional part toward zero.

    Values wider than a 64-bit integer are rejected.
    """
    match = _VALUE_PATTERN.match(_clean_number(token))
    if not match or len(match.group("digits")) > _MAX_VALUE_DIGITS:
        return None
    return int(match.group(0))


def parse_index_token(token: str) -> float | None:
    """Parse the leading decimal number of an index token (``4500.25abc`` -> 4500.25)."""
    match = _INDEX_PATTERN.match(_clean_number(token))
    if not match:
        return None
    parsed = float(match.group(0))
    return parsed if math.isfinite(parsed) else None


def _parse_line(tokens: list[str]) -> tuple[DataPoint | None, str]:
    if len(tokens) < 2:
        return None, "fewer than two fields"

    date_token = tokens[0]
    calendar_date = parse_date_token(date_token)
    if calendar_date is None:
        return None, "unrecognized date"

    value = parse_value_token(tokens[1])
    if value is None:
        return None, "non-numeric value"

    index_value = parse_index_token(tokens[2]) if len(tokens) >= 3 else None
    return (
        DataPoint(date=date_token, calendar_date=calendar_date, value=value, index=index_value),
        "",
    )


def parse_series(raw_text: str, strict: bool = False) -> tuple[DataPoint, ...]:
    """Parse raw CSV text (header + date,value[,index] rows) into a sorted series.

    Lines that cannot be turned into a point are dropped. With ``strict=True``
    the first such line raises :class:`SeriesParseError` instead.
    """
    lines = raw_text.strip().split("\n")
    points: list[DataPoint] = []
    dropped = 0

    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        point, reason = _parse_line(tokenize_line(line))
        if point is None:
            if strict:
                raise SeriesParseError(line_number, line, reason)
            dropped += 1
            logger.debug("Dropping line %d (%s): %r", line_number, reason, line)
            continue
        points.append(point)

    if dropped:
        logger.info("Parsed %d points, dropped %d malformed line(s)", len(points), dropped)

    return tuple(sorted(points, key=lambda point: point.calendar_date))


def read_series_upload(uploaded_file: Any) -> str:
    """Decode an uploaded CSV file (Streamlit upload or file-like) to text."""
    if hasattr(uploaded_file, "getvalue"):
        payload = uploaded_file.getvalue()
    else:
        payload = uploaded_file.read()
    if isinstance(payload, str):
        return payload
    return payload.decode("utf-8-sig")


def points_frame(points: Iterable[DataPoint]) -> pd.DataFrame:
    """Tabular view of a parsed series for charts and tables."""
    rows = [
        {
            "Date": pd.Timestamp(point.calendar_date),
            "DateLabel": point.date,
            "Value": point.value,
            "Index": point.index if point.index is not None else float("nan"),
        }
        for point in points
    ]
    if not rows:
        return pd.DataFrame(columns=["Date", "DateLabel", "Value", "Index"])
    return pd.DataFrame(rows)
