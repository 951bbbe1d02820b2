"""Immutable records shared by the parser, analytics and views."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DataPoint:
    """One row of the portfolio (and optional market index) series."""

    date: str  # original token, e.g. "2024/12/31"
    calendar_date: datetime.date
    value: int
    index: Optional[float] = None


@dataclass(frozen=True)
class MonthlyGrowth:
    """Start/end/growth figures for one calendar month."""

    month: str  # YYYY-MM
    start_value: int
    end_value: int
    growth: int
    growth_percent: float
