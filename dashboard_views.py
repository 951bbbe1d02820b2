"""Modular Streamlit page renderers."""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from ai_assistant import PortfolioAssistant
from analytics import current_month_totals, monthly_growth_frame
from formatting import format_compact_currency, format_currency, format_percent, format_signed_currency
from metric_guide import METRIC_GUIDE
from models import MonthlyGrowth


def render_kpis(metrics: dict[str, object], symbol: str = "$") -> None:
    st.subheader("Snapshot KPIs")

    current_month = metrics.get("current_month")
    c1, c2 = st.columns(2)
    c1.metric("Net value", format_currency(metrics["current_value"], symbol))
    if current_month is not None:
        c2.metric(
            f"Current month growth ({current_month.month})",
            format_signed_currency(current_month.growth, symbol),
            format_percent(current_month.growth_percent, signed=True),
        )

    c3, c4 = st.columns(2)
    c3.metric(
        "Total return",
        format_percent(metrics["total_change_percent"], signed=True),
        format_signed_currency(metrics["total_change"], symbol),
    )
    c4.metric("All time high", format_currency(metrics["all_time_high"], symbol))


def render_portfolio_chart(chart_frame: pd.DataFrame, has_index: bool) -> None:
    st.markdown("### Portfolio vs Market Index")
    if chart_frame.empty:
        st.info("No observations in the selected date range.")
        return

    chart = chart_frame.set_index("Date")
    if not has_index:
        st.area_chart(chart[["Value"]])
        return

    left, right = st.columns(2)
    with left:
        st.caption("Portfolio value")
        st.area_chart(chart[["Value"]])
    with right:
        st.caption("Market index")
        st.line_chart(chart[["Index"]].dropna())


def render_monthly_growth(records: Sequence[MonthlyGrowth], symbol: str = "$") -> None:
    st.markdown("### Monthly growth")
    table = monthly_growth_frame(records)
    if table.empty:
        st.info("Not enough months to chart growth yet.")
        return

    st.bar_chart(table[["Growth"]])
    view = table.copy()
    view["StartValue"] = view["StartValue"].map(lambda value: format_currency(value, symbol))
    view["EndValue"] = view["EndValue"].map(lambda value: format_currency(value, symbol))
    view["Growth"] = view["Growth"].map(lambda value: format_signed_currency(value, symbol))
    view["GrowthPercent"] = view["GrowthPercent"].map(lambda value: format_percent(value, signed=True))
    st.dataframe(view, use_container_width=True)


def render_current_month(table: pd.DataFrame, month_label: str, symbol: str = "$") -> None:
    st.markdown(f"### {month_label or 'Current month'}")
    if table.empty:
        st.info("No observations for the current month.")
        return

    totals = current_month_totals(table)
    t1, t2 = st.columns(2)
    t1.metric("Month value change", format_signed_currency(totals["value_change"], symbol))
    t2.metric("Month index change", f"{totals['index_change']:+,.2f}")

    view = table.copy()
    view["Value"] = view["Value"].map(lambda value: format_compact_currency(value, symbol))
    view["ValueChange"] = view["ValueChange"].map(lambda value: format_signed_currency(value, symbol))
    st.dataframe(
        view,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Index": st.column_config.NumberColumn("Index", format="%.2f"),
            "IndexChange": st.column_config.NumberColumn("Index change", format="%+.2f"),
            "Trend": st.column_config.LineChartColumn("7-day trend"),
        },
    )


def render_data_explorer(points_table: pd.DataFrame) -> None:
    st.header("Data Explorer")
    st.caption("Parsed observations in chronological order.")
    st.caption(f"{len(points_table):,} rows parsed.")
    st.dataframe(points_table, use_container_width=True, height=520)


def render_metric_guide() -> None:
    st.header("Metric Guide")
    st.caption("Definitions and formulas behind each KPI.")
    st.dataframe(pd.DataFrame(METRIC_GUIDE), use_container_width=True, hide_index=True)


def render_assistant(assistant: PortfolioAssistant) -> None:
    st.header("Portfolio Analyst")
    st.caption(f"Model: {assistant.model}" if assistant.online else "Offline mode: set OPENAI_API_KEY to chat.")

    for message in assistant.messages:
        with st.chat_message(message["role"]):
            st.markdown(message["content"])

    question = st.chat_input("Ask about your portfolio...")
    if not question or not question.strip():
        return

    with st.chat_message("user"):
        st.markdown(question)
    with st.chat_message("assistant"):
        st.write_stream(assistant.stream(question))
