"""StockVision Streamlit entrypoint with modular page navigation."""

from __future__ import annotations

import datetime
import hashlib
import logging

import streamlit as st

from ai_assistant import PortfolioAssistant
from analytics import (
    RANGE_PRESETS,
    chartable_monthly_growth,
    current_month_label,
    current_month_table,
    filter_by_date_range,
    headline_metrics,
    monthly_growth,
    range_bounds,
)
from config import Settings, configure_logging, load_settings
from dashboard_views import (
    render_assistant,
    render_current_month,
    render_data_explorer,
    render_kpis,
    render_metric_guide,
    render_monthly_growth,
    render_portfolio_chart,
)
from models import DataPoint, MonthlyGrowth
from parsing import SUPPORTED_EXTENSIONS, SeriesParseError, parse_series, points_frame, read_series_upload
from sample_data import SAMPLE_CSV

logger = logging.getLogger(__name__)

st.set_page_config(page_title="StockVision", page_icon="\U0001f4c8", layout="wide")


def _inject_styles() -> None:
    st.markdown(
        """
        <style>
        .hero {
            margin-bottom: 0.6rem;
            padding: 1rem 1.2rem;
            border: 1px solid rgba(63, 63, 70, 0.6);
            border-radius: 14px;
            background: rgba(24, 24, 27, 0.85);
            color: #e4e4e7;
        }
        .hero h1 {
            margin: 0;
            letter-spacing: 0.3px;
        }
        .hero p {
            margin: 0.35rem 0 0 0;
            color: #a1a1aa;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def _render_header() -> None:
    st.markdown(
        """
        <div class="hero">
          <h1>StockVision</h1>
          <p>Portfolio Performance Analytics</p>
        </div>
        """,
        unsafe_allow_html=True,
    )


@st.cache_resource
def _settings() -> Settings:
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings


def _load_raw_text() -> str | None:
    st.sidebar.header("Data Setup")
    uploaded_file = st.sidebar.file_uploader(
        "Upload CSV",
        type=[ext.replace(".", "") for ext in SUPPORTED_EXTENSIONS],
        help="Columns: Date (YYYY/MM/DD), Value, optional Index. The first line is a header.",
    )
    if uploaded_file is None:
        st.sidebar.caption("Showing bundled sample data.")
        return SAMPLE_CSV

    try:
        return read_series_upload(uploaded_file)
    except UnicodeDecodeError as exc:
        st.error(f"Could not read file: {exc}")
        return None


def _init_timeframe(points: tuple[DataPoint, ...]) -> tuple[datetime.date, datetime.date]:
    min_date = points[0].calendar_date
    max_date = points[-1].calendar_date

    preset = st.sidebar.radio("Range", [*RANGE_PRESETS, "Custom"], index=RANGE_PRESETS.index("ALL"), horizontal=True)
    if preset != "Custom":
        start, end = range_bounds(points, preset)
        return start, end

    start = st.sidebar.date_input("Start", value=min_date, key="range_start")
    end = st.sidebar.date_input("End", value=max_date, key="range_end")
    return start, end


def _assistant_for(
    settings: Settings,
    raw_text: str,
    points: tuple[DataPoint, ...],
    records: tuple[MonthlyGrowth, ...],
) -> PortfolioAssistant:
    fingerprint = hashlib.sha256(raw_text.encode("utf-8")).hexdigest()
    assistant = st.session_state.get("assistant")
    if assistant is None or st.session_state.get("assistant_source") != fingerprint:
        assistant = PortfolioAssistant(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            symbol=settings.currency_symbol,
        )
        assistant.start_session(points, records)
        st.session_state["assistant"] = assistant
        st.session_state["assistant_source"] = fingerprint
        logger.info("Started assistant session for %d points", len(points))
    return assistant


def main() -> None:
    settings = _settings()
    symbol = settings.currency_symbol
    _inject_styles()
    _render_header()

    view = st.sidebar.radio("Navigate", ["Overview", "Assistant", "Data Explorer", "Metric Guide"])

    raw_text = _load_raw_text()
    if raw_text is None:
        return

    try:
        points = parse_series(raw_text, strict=settings.strict_parsing)
    except SeriesParseError as exc:
        st.error(f"Could not parse file: {exc}")
        return

    if not points:
        st.warning("No valid rows found. Expected a header line followed by Date,Value[,Index] rows.")
        return

    # Shared analytics dataset used by all pages.
    records = monthly_growth(points)
    metrics = headline_metrics(points, records)

    if view == "Overview":
        start_date, end_date = _init_timeframe(points)
        in_range = filter_by_date_range(points, start_date, end_date)
        render_kpis(metrics, symbol)
        render_portfolio_chart(points_frame(in_range), any(point.index is not None for point in points))
        render_monthly_growth(chartable_monthly_growth(records), symbol)
        render_current_month(current_month_table(points), current_month_label(points), symbol)
    elif view == "Assistant":
        render_assistant(_assistant_for(settings, raw_text, points, records))
    elif view == "Data Explorer":
        render_data_explorer(points_frame(points))
    elif view == "Metric Guide":
        render_metric_guide()


if __name__ == "__main__":
    main()
