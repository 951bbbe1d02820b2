"""Growth analytics over a parsed portfolio series."""

from __future__ import annotations

import datetime
from collections import defaultdict
from typing import Iterable, Sequence

import pandas as pd

from models import DataPoint, MonthlyGrowth

RANGE_PRESETS = ("1D", "7D", "1M", "3M", "YTD", "ALL")


def month_key(day: datetime.date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def growth_percent(growth: float, start_value: float) -> float:
    """Percent change relative to ``start_value``; 0 when the base is 0."""
    if start_value == 0:
        return 0.0
    return float(growth / start_value * 100.0)


def monthly_growth(points: Iterable[DataPoint]) -> tuple[MonthlyGrowth, ...]:
    """One growth record per calendar month present in ``points``.

    The first month is measured from its own opening value; every later
    month is measured from the closing value of the previous month present
    in the data, so months missing from the series are simply skipped.
    """
    buckets: dict[str, list[DataPoint]] = defaultdict(list)
    for point in points:
        buckets[month_key(point.calendar_date)].append(point)

    records: list[MonthlyGrowth] = []
    previous_end: int | None = None
    for key in sorted(buckets):
        bucket = sorted(buckets[key], key=lambda point: point.calendar_date)
        end_value = bucket[-1].value
        start_value = bucket[0].value if previous_end is None else previous_end
        growth = end_value - start_value
        records.append(
            MonthlyGrowth(
                month=key,
                start_value=start_value,
                end_value=end_value,
                growth=growth,
                growth_percent=growth_percent(growth, start_value),
            )
        )
        previous_end = end_value

    return tuple(records)


def monthly_growth_frame(records: Iterable[MonthlyGrowth]) -> pd.DataFrame:
    """Month-indexed table of growth records."""
    rows = [
        {
            "Month": record.month,
            "StartValue": record.start_value,
            "EndValue": record.end_value,
            "Growth": record.growth,
            "GrowthPercent": record.growth_percent,
        }
        for record in records
    ]
    if not rows:
        return pd.DataFrame(columns=["StartValue", "EndValue", "Growth", "GrowthPercent"]).rename_axis("Month")
    return pd.DataFrame(rows).set_index("Month")


def chartable_monthly_growth(records: Sequence[MonthlyGrowth]) -> tuple[MonthlyGrowth, ...]:
    """Drop a leading zero-growth month, which only reflects the opening value."""
    if records and records[0].growth == 0:
        return tuple(records[1:])
    return tuple(records)


def range_bounds(
    points: Sequence[DataPoint], preset: str
) -> tuple[datetime.date, datetime.date] | None:
    """Return the inclusive (start, end) window for a range preset."""
    if preset not in RANGE_PRESETS:
        raise ValueError(f"Unknown range preset: {preset}. Supported: {', '.join(RANGE_PRESETS)}.")
    if not points:
        return None

    end = points[-1].calendar_date
    if preset == "1D":
        start = end - datetime.timedelta(days=1)
    elif preset == "7D":
        start = end - datetime.timedelta(days=7)
    elif preset == "1M":
        start = (pd.Timestamp(end) - pd.DateOffset(months=1)).date()
    elif preset == "3M":
        start = (pd.Timestamp(end) - pd.DateOffset(months=3)).date()
    elif preset == "YTD":
        start = datetime.date(end.year, 1, 1)
    else:
        start = points[0].calendar_date
    return start, end


def filter_by_date_range(
    points: Iterable[DataPoint], start_date: datetime.date, end_date: datetime.date
) -> tuple[DataPoint, ...]:
    """Points whose calendar date falls in the inclusive range."""
    return tuple(point for point in points if start_date <= point.calendar_date <= end_date)


def headline_metrics(
    points: Sequence[DataPoint], records: Sequence[MonthlyGrowth]
) -> dict[str, object]:
    """Net value, total return and all-time high for the whole series."""
    if not points:
        return {}

    current_value = points[-1].value
    start_value = points[0].value
    total_change = current_value - start_value
    return {
        "current_value": current_value,
        "start_value": start_value,
        "total_change": total_change,
        "total_change_percent": growth_percent(total_change, start_value),
        "all_time_high": max(point.value for point in points),
        "first_date": points[0].date,
        "last_date": points[-1].date,
        "current_month": records[-1] if records else None,
    }


def index_comparison(points: Sequence[DataPoint]) -> dict[str, float] | None:
    """Market index growth between the first and last point, when both carry one."""
    if not points:
        return None
    first, last = points[0], points[-1]
    if first.index is None or last.index is None:
        return None

    index_growth = last.index - first.index
    return {
        "start_index": first.index,
        "current_index": last.index,
        "index_growth": index_growth,
        "index_growth_percent": growth_percent(index_growth, first.index),
    }


def current_month_table(points: Sequence[DataPoint], trend_window: int = 7) -> pd.DataFrame:
    """Daily changes for the month of the latest point, newest first."""
    columns = ["Date", "Value", "ValueChange", "Index", "IndexChange", "Trend"]
    if not points:
        return pd.DataFrame(columns=columns)

    target = points[-1].calendar_date
    rows = []
    for position, point in enumerate(points):
        day = point.calendar_date
        if (day.year, day.month) != (target.year, target.month):
            continue

        value_change = 0
        index_change = 0.0
        if position > 0:
            previous = points[position - 1]
            value_change = point.value - previous.value
            if point.index is not None and previous.index is not None:
                index_change = point.index - previous.index

        history = points[max(0, position - trend_window + 1) : position + 1]
        rows.append(
            {
                "Date": point.date,
                "CalendarDate": day,
                "Value": point.value,
                "ValueChange": value_change,
                "Index": point.index if point.index is not None else float("nan"),
                "IndexChange": index_change,
                "Trend": [item.value for item in history],
                "_Position": position,
            }
        )

    out = pd.DataFrame(rows)
    out = out.sort_values(["CalendarDate", "_Position"], ascending=False)
    return out[columns].reset_index(drop=True)


def current_month_totals(table: pd.DataFrame) -> dict[str, float]:
    if table.empty:
        return {"value_change": 0.0, "index_change": 0.0}
    return {
        "value_change": float(table["ValueChange"].sum()),
        "index_change": float(table["IndexChange"].sum()),
    }


def current_month_label(points: Sequence[DataPoint]) -> str:
    """Month name of the latest point, e.g. ``December 2024``."""
    if not points:
        return ""
    return points[-1].calendar_date.strftime("%B %Y")
