"""Plotly visualisation helpers for the expense report page.

Each function takes the output of one function in :mod:`reports` and
returns a ``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.  Empty inputs produce an empty figure titled
"No data to display" rather than raising.
"""

from __future__ import annotations

from typing import Dict

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_monthly_bar_chart(monthly: Dict[str, float], title: str | None = None) -> go.Figure:
    """Bar chart of spend per month.

    Parameters
    ----------
    monthly : dict
        Mapping of ``YYYY-MM`` keys to totals, as returned by
        :func:`reports.total_by_month`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with months in chronological order.
    """
    if not monthly:
        return _empty_figure()
    df = pd.DataFrame(
        {"Month": list(monthly.keys()), "Amount": list(monthly.values())}
    ).sort_values("Month")
    fig = px.bar(df, x="Month", y="Amount")
    fig.update_layout(
        title=title or "Expenses by Month",
        xaxis_title="Month",
        yaxis_title="Amount",
        xaxis_type="category",
    )
    return fig


def create_category_pie_chart(breakdown: Dict[str, float], title: str | None = None) -> go.Figure:
    """Donut chart of spend per category; zero categories are left out."""
    values = {category: total for category, total in breakdown.items() if total > 0}
    if not values:
        return _empty_figure()
    df = pd.DataFrame({"Category": list(values.keys()), "Amount": list(values.values())})
    fig = px.pie(df, names="Category", values="Amount", hole=0.4)
    fig.update_layout(title=title or "Expenses by Category")
    return fig


def create_month_category_chart(table: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Stacked bar chart from :func:`reports.month_category_frame`."""
    if table.empty:
        return _empty_figure()
    df = table.reset_index().melt(id_vars="month", var_name="category", value_name="amount")
    df = df[df["amount"] > 0]
    fig = px.bar(df, x="month", y="amount", color="category", barmode="stack")
    fig.update_layout(
        title=title or "Expenses by Month & Category",
        xaxis_title="Month",
        yaxis_title="Amount",
        xaxis_type="category",
        legend_title="Category",
    )
    return fig
