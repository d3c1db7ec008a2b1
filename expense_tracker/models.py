"""Expense record definition plus the validation and JSON codec around it.

An :class:`Expense` is immutable once created; edits produce a new record
with the same ``id`` and ``date``.  Amounts are stored already net of any
split, so nothing downstream needs to know a split ever happened.
"""

from __future__ import annotations

import json
import math
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .errors import InvalidAmount, InvalidCategory, InvalidSplitPercent


@dataclass(frozen=True)
class Expense:
    id: str
    amount: float
    category: str
    date: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'amount': self.amount,
            'category': self.category,
            'date': self.date.isoformat(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'Expense':
        """Build an Expense from a decoded JSON object.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` when a field is
        missing or malformed; the store treats any of these as a corrupt blob.
        """
        expense_id = data['id']
        category = data['category']
        if not isinstance(expense_id, str) or not isinstance(category, str):
            raise TypeError("Expense id and category must be strings")
        return Expense(
            id=expense_id,
            amount=parse_amount(data['amount']),
            category=category,
            date=datetime.fromisoformat(data['date']),
        )

    def with_changes(self, **changes: Any) -> 'Expense':
        return replace(self, **changes)


def new_expense_id() -> str:
    return uuid.uuid4().hex


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("Booleans are not numbers here")
    if isinstance(value, str):
        value = value.strip().replace(',', '')
    return float(value)


def parse_amount(value: Any) -> float:
    """Coerce user input to a strictly positive, finite float.

    Accepts ints, floats, ``Decimal`` and numeric strings (thousands
    separators allowed).

    Example:
        >>> parse_amount("1,250.50")
        1250.5
    """
    try:
        amount = _to_float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidAmount(f"Amount must be a number, got {value!r}", value) from None
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(f"Amount must be greater than zero, got {value!r}", value)
    return amount


def validate_category(category: Any, categories: Sequence[str]) -> str:
    if not isinstance(category, str) or category not in categories:
        raise InvalidCategory(
            f"Unknown category {category!r}; expected one of: {', '.join(categories)}",
            category,
        )
    return category


def parse_split_percent(value: Any) -> Optional[float]:
    """Validate a split percentage; ``None`` means the expense is not split."""
    if value is None:
        return None
    try:
        percent = _to_float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidSplitPercent(f"Split percentage must be a number, got {value!r}", value) from None
    if not math.isfinite(percent) or not 0 <= percent <= 100:
        raise InvalidSplitPercent(f"Split percentage must be between 0 and 100, got {value!r}", value)
    return percent


def apply_split(amount: float, split_percent: Optional[float]) -> float:
    if split_percent is None:
        return amount
    return amount * (split_percent / 100)


def compute_amount(raw_amount: Any, split_percent: Any = None) -> float:
    """Validate a raw amount and split, returning the amount to store.

    The split is applied once; a 0% split leaves nothing to record and is
    rejected like any other non-positive amount.

    Example:
        >>> compute_amount(100, 50)
        50.0
    """
    amount = parse_amount(raw_amount)
    percent = parse_split_percent(split_percent)
    final = apply_split(amount, percent)
    if final <= 0:
        raise InvalidAmount(
            f"Split of {percent:g}% leaves nothing to record for {amount:g}",
            raw_amount,
        )
    return final


# ---------------------------------------------------------------------------
# JSON codec
# ---------------------------------------------------------------------------


def encode_expenses(expenses: Iterable[Expense]) -> bytes:
    payload = [expense.to_dict() for expense in expenses]
    return json.dumps(payload, indent=2).encode('utf-8')


def decode_expenses(blob: bytes) -> List[Expense]:
    """Decode a stored blob; raises ``ValueError`` on anything malformed."""
    try:
        data = json.loads(blob.decode('utf-8'))
    except UnicodeDecodeError as exc:
        raise ValueError(f"Stored expenses are not UTF-8: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError("Stored expenses must be a JSON list")

    expenses: List[Expense] = []
    seen = set()
    for item in data:
        if not isinstance(item, dict):
            raise ValueError("Each stored expense must be a JSON object")
        try:
            expense = Expense.from_dict(item)
        except (KeyError, TypeError, InvalidAmount) as exc:
            raise ValueError(f"Malformed stored expense {item!r}: {exc}") from exc
        if expense.id in seen:
            raise ValueError(f"Duplicate expense id {expense.id!r}")
        seen.add(expense.id)
        expenses.append(expense)
    return expenses
