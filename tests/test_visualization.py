from datetime import datetime

from expense_tracker import reports
from expense_tracker.formatting import escape_dollar_for_markdown, format_currency, format_split
from expense_tracker.models import Expense
from expense_tracker.visualization import (
    create_category_pie_chart,
    create_month_category_chart,
    create_monthly_bar_chart,
)


def _sample():
    return [
        Expense(id='a', amount=100.0, category='Food', date=datetime(2025, 3, 1)),
        Expense(id='b', amount=50.0, category='Transportation', date=datetime(2025, 2, 15)),
        Expense(id='c', amount=200.0, category='Food', date=datetime(2025, 2, 1)),
    ]


def test_format_currency():
    assert format_currency(1234.5) == '$1,234.50'
    assert format_currency(0) == '$0.00'
    assert format_currency(1234.5, include_sign=False) == '1,234.50'
    assert escape_dollar_for_markdown(50) == '\\$50.00'


def test_format_split():
    assert format_split(None) == 'Not split'
    assert format_split(50.0) == 'Split Percentage: 50%'


def test_monthly_bar_chart_orders_months():
    fig = create_monthly_bar_chart(reports.total_by_month(_sample()))
    assert list(fig.data[0].x) == ['2025-02', '2025-03']
    assert list(fig.data[0].y) == [250.0, 100.0]


def test_category_pie_chart_skips_zero_categories():
    breakdown = reports.category_breakdown(_sample(), ['Food', 'Other', 'Transportation'])
    fig = create_category_pie_chart(breakdown)
    assert set(fig.data[0].labels) == {'Food', 'Transportation'}


def test_month_category_chart_has_trace_per_category():
    fig = create_month_category_chart(reports.month_category_frame(_sample()))
    assert {trace.name for trace in fig.data} == {'Food', 'Transportation'}


def test_empty_inputs_produce_placeholder_figures():
    for fig in (
        create_monthly_bar_chart({}),
        create_category_pie_chart({'Food': 0.0}),
        create_month_category_chart(reports.month_category_frame([])),
    ):
        assert fig.layout.title.text == 'No data to display'
        assert len(fig.data) == 0
