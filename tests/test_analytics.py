import datetime
import math

import pandas as pd
import pytest

from analytics import (
    chartable_monthly_growth,
    current_month_label,
    current_month_table,
    current_month_totals,
    filter_by_date_range,
    headline_metrics,
    index_comparison,
    monthly_growth,
    monthly_growth_frame,
    range_bounds,
)
from models import DataPoint
from parsing import parse_series
from sample_data import SAMPLE_CSV

SCENARIO_A = "Date,Value\n2024/01/01,1000\n2024/01/31,1100\n2024/02/29,1210\n"


def _point(day: str, value: int, index: float | None = None) -> DataPoint:
    year, month, dom = (int(part) for part in day.split("/"))
    return DataPoint(date=day, calendar_date=datetime.date(year, month, dom), value=value, index=index)


def test_monthly_growth_chains_to_previous_month_close() -> None:
    records = monthly_growth(parse_series(SCENARIO_A))

    assert [record.month for record in records] == ["2024-01", "2024-02"]
    january, february = records
    assert (january.start_value, january.end_value, january.growth) == (1000, 1100, 100)
    assert january.growth_percent == pytest.approx(10.0)
    assert (february.start_value, february.end_value, february.growth) == (1100, 1210, 110)
    assert february.growth_percent == pytest.approx(10.0)


def test_monthly_growth_single_row_has_zero_growth() -> None:
    records = monthly_growth(parse_series("Date,Value\n2024/05/10,5000\n"))

    assert len(records) == 1
    assert records[0].start_value == records[0].end_value == 5000
    assert records[0].growth == 0
    assert records[0].growth_percent == 0.0


def test_monthly_growth_skips_missing_months_without_gap_filling() -> None:
    points = [_point("2024/01/15", 100), _point("2024/03/01", 120), _point("2024/03/31", 130)]

    records = monthly_growth(points)

    assert [record.month for record in records] == ["2024-01", "2024-03"]
    assert records[1].start_value == 100
    assert records[1].end_value == 130
    assert records[1].growth == 30


def test_monthly_growth_zero_start_value_reports_zero_percent() -> None:
    points = [_point("2024/01/01", 0), _point("2024/02/01", 50)]

    records = monthly_growth(points)

    assert records[1].start_value == 0
    assert records[1].growth == 50
    assert records[1].growth_percent == 0.0


def test_monthly_growth_resorts_unsorted_input_within_month() -> None:
    points = [_point("2024/01/31", 150), _point("2024/02/10", 160), _point("2024/01/01", 100)]

    records = monthly_growth(points)

    assert records[0].start_value == 100
    assert records[0].end_value == 150
    assert records[1].start_value == 150


def test_monthly_growth_properties_on_sample_data() -> None:
    points = parse_series(SAMPLE_CSV)

    records = monthly_growth(points)

    months = {f"{point.calendar_date.year:04d}-{point.calendar_date.month:02d}" for point in points}
    assert {record.month for record in records} == months
    assert [record.month for record in records] == sorted(months)
    for previous, current in zip(records, records[1:]):
        assert current.start_value == previous.end_value
    for record in records:
        assert math.isfinite(record.growth_percent)
        assert record.growth == record.end_value - record.start_value


def test_monthly_growth_empty_input() -> None:
    assert monthly_growth(()) == ()
    assert monthly_growth_frame(()).empty


def test_monthly_growth_frame_is_indexed_by_month() -> None:
    out = monthly_growth_frame(monthly_growth(parse_series(SCENARIO_A)))

    assert out.index.name == "Month"
    assert list(out.index) == ["2024-01", "2024-02"]
    assert list(out["Growth"]) == [100, 110]


def test_chartable_monthly_growth_drops_leading_zero_month() -> None:
    points = [_point("2024/01/01", 100), _point("2024/02/01", 120)]
    records = monthly_growth(points)

    out = chartable_monthly_growth(records)

    assert [record.month for record in out] == ["2024-02"]
    assert len(monthly_growth(points)) == 2
    assert chartable_monthly_growth(monthly_growth(parse_series(SCENARIO_A))) == monthly_growth(
        parse_series(SCENARIO_A)
    )
    assert chartable_monthly_growth(()) == ()


def test_range_bounds_presets() -> None:
    points = [_point("2023/11/15", 1), _point("2024/03/31", 2)]
    end = datetime.date(2024, 3, 31)

    assert range_bounds(points, "1D") == (datetime.date(2024, 3, 30), end)
    assert range_bounds(points, "7D") == (datetime.date(2024, 3, 24), end)
    assert range_bounds(points, "1M") == (datetime.date(2024, 2, 29), end)
    assert range_bounds(points, "3M") == (datetime.date(2023, 12, 31), end)
    assert range_bounds(points, "YTD") == (datetime.date(2024, 1, 1), end)
    assert range_bounds(points, "ALL") == (datetime.date(2023, 11, 15), end)
    assert range_bounds((), "ALL") is None


def test_range_bounds_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        range_bounds([_point("2024/01/01", 1)], "5Y")


def test_filter_by_date_range_is_inclusive() -> None:
    points = parse_series(SCENARIO_A)

    out = filter_by_date_range(points, datetime.date(2024, 1, 31), datetime.date(2024, 2, 29))

    assert [point.value for point in out] == [1100, 1210]
    assert filter_by_date_range(points, datetime.date(2024, 3, 1), datetime.date(2024, 1, 1)) == ()


def test_headline_metrics_summarize_series() -> None:
    points = parse_series(SCENARIO_A)
    records = monthly_growth(points)

    metrics = headline_metrics(points, records)

    assert metrics["current_value"] == 1210
    assert metrics["start_value"] == 1000
    assert metrics["total_change"] == 210
    assert metrics["total_change_percent"] == pytest.approx(21.0)
    assert metrics["all_time_high"] == 1210
    assert metrics["first_date"] == "2024/01/01"
    assert metrics["last_date"] == "2024/02/29"
    assert metrics["current_month"] == records[-1]
    assert headline_metrics((), ()) == {}


def test_index_comparison_requires_both_endpoints() -> None:
    with_index = [_point("2024/01/01", 1, 100.0), _point("2024/01/02", 2), _point("2024/01/03", 3, 110.0)]
    missing_end = [_point("2024/01/01", 1, 100.0), _point("2024/01/02", 2)]

    out = index_comparison(with_index)

    assert out["start_index"] == 100.0
    assert out["current_index"] == 110.0
    assert out["index_growth_percent"] == pytest.approx(10.0)
    assert index_comparison(missing_end) is None
    assert index_comparison(()) is None


def test_current_month_table_daily_changes_newest_first() -> None:
    points = [
        _point("2024/01/31", 1000, 100.0),
        _point("2024/02/01", 1100, 101.5),
        _point("2024/02/02", 1050),
        _point("2024/02/05", 1200, 103.0),
    ]

    out = current_month_table(points)

    assert list(out["Date"]) == ["2024/02/05", "2024/02/02", "2024/02/01"]
    assert list(out["ValueChange"]) == [150, -50, 100]
    assert list(out["IndexChange"]) == pytest.approx([0.0, 0.0, 1.5])
    assert pd.isna(out["Index"].iloc[1])
    assert out["Trend"].iloc[0] == [1000, 1100, 1050, 1200]
    assert out["Trend"].iloc[2] == [1000, 1100]

    totals = current_month_totals(out)
    assert totals["value_change"] == 200.0
    assert totals["index_change"] == pytest.approx(1.5)
    assert current_month_label(points) == "February 2024"


def test_current_month_table_trend_window_and_first_point() -> None:
    points = [_point("2024/02/01", 1000), _point("2024/02/02", 1010), _point("2024/02/03", 990)]

    out = current_month_table(points, trend_window=2)

    assert out["Trend"].iloc[0] == [1010, 990]
    assert out["ValueChange"].iloc[-1] == 0


def test_current_month_table_empty_series() -> None:
    out = current_month_table(())

    assert out.empty
    assert current_month_totals(out) == {"value_change": 0.0, "index_change": 0.0}
    assert current_month_label(()) == ""
