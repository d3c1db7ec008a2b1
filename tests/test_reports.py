"""Unit tests for expense_tracker.reports."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from expense_tracker import reports
from expense_tracker.config import DEFAULT_CATEGORIES
from expense_tracker.models import Expense


def _expense(expense_id, amount, category, when):
    return Expense(id=expense_id, amount=amount, category=category, date=when)


def _scenario():
    return [
        _expense('a', 100.0, 'Food', datetime(2025, 2, 1, 9, 30)),
        _expense('b', 50.0, 'Transportation', datetime(2025, 2, 15, 18, 0)),
        _expense('c', 200.0, 'Food', datetime(2025, 3, 1, 0, 0)),
    ]


def _mixed():
    return [
        _expense('1', 12.35, 'Food', datetime(2024, 12, 31, 23, 59, 59)),
        _expense('2', 1500.0, 'Housing & Utilities', datetime(2025, 1, 1, 0, 0)),
        _expense('3', 0.1, 'Entertainment', datetime(2025, 1, 20, 12, 0)),
        _expense('4', 0.2, 'Entertainment', datetime(2025, 1, 21, 12, 0)),
        _expense('5', 42.0, 'Other', datetime(2025, 10, 3, 8, 15)),
        _expense('6', 7.77, 'Transportation', datetime(2025, 10, 30, 17, 45)),
    ]


def test_scenario_totals():
    expenses = _scenario()
    assert reports.total_sum(expenses) == 350.0
    assert reports.total_by_category(expenses, 'Food') == 300.0
    assert reports.total_by_month(expenses) == {'2025-02': 150.0, '2025-03': 200.0}
    assert reports.total_by_month_and_category(expenses) == {
        '2025-02': {'Food': 100.0, 'Transportation': 50.0},
        '2025-03': {'Food': 200.0},
    }


def test_empty_input_yields_zero_and_empty_mappings():
    assert reports.total_sum([]) == 0.0
    assert reports.total_by_category([], 'Food') == 0.0
    assert reports.total_by_month([]) == {}
    assert reports.total_by_month_and_category([]) == {}


def test_results_are_plain_floats():
    expenses = _scenario()
    assert type(reports.total_sum(expenses)) is float
    assert all(type(v) is float for v in reports.total_by_month(expenses).values())
    nested = reports.total_by_month_and_category(expenses)
    assert all(type(v) is float for inner in nested.values() for v in inner.values())


def test_unknown_or_unused_category_totals_zero():
    expenses = _scenario()
    assert reports.total_by_category(expenses, 'Entertainment') == 0.0
    assert reports.total_by_category(expenses, 'Yachts') == 0.0


def test_total_sum_is_order_invariant():
    expenses = _mixed()
    expected = sum(e.amount for e in expenses)
    shuffled = list(expenses)
    random.Random(7).shuffle(shuffled)
    assert reports.total_sum(expenses) == pytest.approx(expected)
    assert reports.total_sum(shuffled) == pytest.approx(reports.total_sum(expenses))


def test_category_totals_partition_the_total():
    expenses = _mixed()
    by_category = sum(reports.total_by_category(expenses, c) for c in DEFAULT_CATEGORIES)
    assert by_category == pytest.approx(reports.total_sum(expenses))


def test_month_totals_partition_the_total():
    expenses = _mixed()
    total = reports.total_sum(expenses)
    assert sum(reports.total_by_month(expenses).values()) == pytest.approx(total)
    nested = reports.total_by_month_and_category(expenses)
    assert sum(v for inner in nested.values() for v in inner.values()) == pytest.approx(total)


def test_month_grouping_ignores_day_and_time():
    monthly = reports.total_by_month(_mixed())
    assert monthly == pytest.approx({
        '2024-12': 12.35,
        '2025-01': 1500.3,
        '2025-10': 49.77,
    })


def test_month_keys_come_back_in_chronological_order():
    expenses = list(reversed(_mixed()))
    assert list(reports.total_by_month(expenses)) == ['2024-12', '2025-01', '2025-10']
    nested = reports.total_by_month_and_category(expenses)
    assert list(nested) == ['2024-12', '2025-01', '2025-10']
    assert list(nested['2025-10']) == ['Other', 'Transportation']


def test_only_occurring_month_category_pairs_are_present():
    nested = reports.total_by_month_and_category(_mixed())
    assert nested['2025-01'] == pytest.approx({'Entertainment': 0.3, 'Housing & Utilities': 1500.0})
    assert 'Food' not in nested['2025-01']


@pytest.mark.parametrize(
    'when, expected',
    [
        (datetime(2025, 2, 14, 18, 30), '2025-02'),
        (datetime(1999, 12, 31, 23, 59), '1999-12'),
        (datetime(987, 5, 1), '0987-05'),
    ],
)
def test_month_key_is_zero_padded(when, expected):
    assert reports.month_key(when) == expected


def test_month_key_sorts_chronologically():
    dates = [datetime(2000 + (i * 7) % 99, 1 + (i * 5) % 12, 1 + i % 28) for i in range(60)]
    by_key = sorted(dates, key=reports.month_key)
    assert [reports.month_key(d) for d in by_key] == [reports.month_key(d) for d in sorted(dates)]


def test_category_breakdown_lists_every_configured_category():
    breakdown = reports.category_breakdown(_scenario(), DEFAULT_CATEGORIES)
    assert list(breakdown) == DEFAULT_CATEGORIES
    assert breakdown['Food'] == 300.0
    assert breakdown['Transportation'] == 50.0
    assert breakdown['Housing & Utilities'] == 0.0


def test_expenses_frame_columns_and_month():
    df = reports.expenses_frame(_scenario())
    assert list(df.columns) == reports.FRAME_COLUMNS
    assert list(df['month']) == ['2025-02', '2025-02', '2025-03']
    assert reports.expenses_frame([]).empty


def test_month_category_frame_fills_missing_cells():
    table = reports.month_category_frame(_scenario())
    assert list(table.index) == ['2025-02', '2025-03']
    assert list(table.columns) == ['Food', 'Transportation']
    assert table.loc['2025-03', 'Transportation'] == 0.0
    assert table.loc['2025-02', 'Food'] == 100.0


def test_month_category_frame_with_configured_categories():
    table = reports.month_category_frame(_scenario(), DEFAULT_CATEGORIES)
    assert list(table.columns) == DEFAULT_CATEGORIES
    assert table['Other'].sum() == 0.0
    empty = reports.month_category_frame([], DEFAULT_CATEGORIES)
    assert empty.empty
    assert list(empty.columns) == DEFAULT_CATEGORIES


def test_reports_do_not_mutate_input():
    expenses = _scenario()
    snapshot = list(expenses)
    reports.total_by_month_and_category(expenses)
    reports.month_category_frame(expenses)
    assert expenses == snapshot
