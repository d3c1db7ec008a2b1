"""Spending reports computed from a snapshot of expenses.

Every function here is pure: it takes any iterable of
:class:`~expense_tracker.models.Expense` (usually ``ExpenseStore.all()``)
and returns fresh numbers, dicts or DataFrames.  Nothing is cached and
nothing is written back, so the entry page and the report page can call
the same functions and always agree.

Month keys use the ``YYYY-MM`` format, which sorts lexicographically in
chronological order.  Dict results are built with their keys already in
that order (months chronologically, categories alphabetically).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Iterable, Optional, Sequence, Union

import pandas as pd

from .models import Expense

FRAME_COLUMNS = ['id', 'amount', 'category', 'date', 'month']


def month_key(value: Union[date, datetime]) -> str:
    """Return the ``YYYY-MM`` grouping key for a date.

    Example:
        >>> month_key(datetime(2025, 2, 14, 18, 30))
        '2025-02'
    """
    return f"{value.year:04d}-{value.month:02d}"


def expenses_frame(expenses: Iterable[Expense]) -> pd.DataFrame:
    """Tabulate expenses with a derived ``month`` column, one row per expense."""
    expenses = list(expenses)
    return pd.DataFrame(
        {
            'id': pd.Series([e.id for e in expenses], dtype=object),
            'amount': pd.Series([e.amount for e in expenses], dtype=float),
            'category': pd.Series([e.category for e in expenses], dtype=object),
            # Python objects, since datetime64[ns] cannot hold every year.
            'date': pd.Series([e.date for e in expenses], dtype=object),
            'month': pd.Series([month_key(e.date) for e in expenses], dtype=object),
        },
        columns=FRAME_COLUMNS,
    )


def total_sum(expenses: Iterable[Expense]) -> float:
    """Sum of every amount; 0.0 when there is nothing to sum."""
    df = expenses_frame(expenses)
    return float(df['amount'].sum())


def total_by_category(expenses: Iterable[Expense], category: str) -> float:
    """Sum of amounts recorded under ``category``; 0.0 if none match."""
    df = expenses_frame(expenses)
    return float(df.loc[df['category'] == category, 'amount'].sum())


def total_by_month(expenses: Iterable[Expense]) -> Dict[str, float]:
    """Sum per ``YYYY-MM`` month, only for months that have expenses."""
    df = expenses_frame(expenses)
    grouped = df.groupby('month', sort=True)['amount'].sum()
    return {month: float(total) for month, total in grouped.items()}


def total_by_month_and_category(expenses: Iterable[Expense]) -> Dict[str, Dict[str, float]]:
    """Sum per month, then per category within each month.

    Only (month, category) pairs that actually occur get an entry.

    Example:
        >>> total_by_month_and_category(store.all())
        {'2025-02': {'Food': 100.0, 'Transportation': 50.0}, '2025-03': {'Food': 200.0}}
    """
    df = expenses_frame(expenses)
    grouped = df.groupby(['month', 'category'], sort=True)['amount'].sum()

    result: Dict[str, Dict[str, float]] = {}
    for (month, category), total in grouped.items():
        result.setdefault(month, {})[category] = float(total)
    return result


def category_breakdown(expenses: Iterable[Expense], categories: Sequence[str]) -> Dict[str, float]:
    """Total for every configured category, in configured order, zeros included."""
    df = expenses_frame(expenses)
    grouped = df.groupby('category')['amount'].sum()
    return {category: float(grouped.get(category, 0.0)) for category in categories}


def month_category_frame(
    expenses: Iterable[Expense],
    categories: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Month x category table of totals, missing cells filled with 0.

    Months form the (chronological) index.  Columns are the categories
    present, alphabetically, or exactly ``categories`` when given.
    """
    df = expenses_frame(expenses)
    if df.empty:
        table = pd.DataFrame(dtype=float)
    else:
        table = df.pivot_table(
            index='month',
            columns='category',
            values='amount',
            aggfunc='sum',
            fill_value=0.0,
        ).sort_index()
        table = table.reindex(sorted(table.columns), axis=1)
    if categories is not None:
        table = table.reindex(columns=list(categories), fill_value=0.0)
    table.index.name = 'month'
    table.columns.name = 'category'
    return table.astype(float)
