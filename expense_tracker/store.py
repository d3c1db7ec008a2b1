"""ExpenseStore: the single owner of the expense collection.

The store keeps the ordered list of :class:`Expense` records in memory and
writes the whole collection to its backend after every mutation.  Readers
get immutable snapshots through :meth:`ExpenseStore.all` and hand them to
:mod:`expense_tracker.reports`.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .config import STORAGE_KEY, load_categories
from .errors import NotFound, PersistenceUnavailable
from .models import (
    Expense,
    compute_amount,
    decode_expenses,
    encode_expenses,
    new_expense_id,
    validate_category,
)
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class ExpenseStore:
    """Ordered, persisted collection of expenses."""

    def __init__(
        self,
        backend: KeyValueStore,
        categories: Optional[Sequence[str]] = None,
        key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the store and load whatever the backend holds.

        Args:
            backend: Object exposing ``get(key)`` and ``set(key, bytes)``.
            categories: Valid category labels. Defaults to the configured list.
            key: Storage key for the serialized collection.
            clock: Returns the timestamp given to new expenses.
        """
        self.backend = backend
        if categories is None:
            categories = load_categories()
        self.categories: Tuple[str, ...] = tuple(categories)
        self.key = key
        self._clock = clock
        self._lock = threading.RLock()
        self._expenses: List[Expense] = []
        self.load()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def all(self) -> Tuple[Expense, ...]:
        """Snapshot of every expense in insertion order."""
        with self._lock:
            return tuple(self._expenses)

    def get(self, expense_id: str) -> Expense:
        with self._lock:
            return self._expenses[self._index_of(expense_id)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._expenses)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, amount: Any, category: str, split_percent: Any = None) -> Expense:
        """Record a new expense stamped with the current time.

        Args:
            amount: Raw entered amount (number or numeric string).
            category: One of ``self.categories``.
            split_percent: Optional share in [0, 100] applied to ``amount``.

        Returns:
            The stored expense.

        Raises:
            InvalidAmount, InvalidCategory, InvalidSplitPercent: on bad input;
                nothing is stored.
            PersistenceUnavailable: if the backend write fails; the
                in-memory collection is left unchanged.
        """
        final_amount = compute_amount(amount, split_percent)
        validate_category(category, self.categories)

        expense = Expense(
            id=new_expense_id(),
            amount=final_amount,
            category=category,
            date=self._clock(),
        )
        with self._lock:
            self._commit(self._expenses + [expense])
        logger.info("Added expense %s: %.2f in %s", expense.id, expense.amount, expense.category)
        return expense

    def remove(self, expense_id: str) -> None:
        with self._lock:
            index = self._index_of(expense_id)
            survivors = self._expenses[:index] + self._expenses[index + 1:]
            self._commit(survivors)
        logger.info("Removed expense %s", expense_id)

    def remove_at(self, position: int) -> Expense:
        """Delete the expense shown at ``position`` in :meth:`all` order."""
        with self._lock:
            if not 0 <= position < len(self._expenses):
                raise NotFound(f"No expense at position {position}", position)
            expense = self._expenses[position]
            self.remove(expense.id)
        return expense

    def edit(
        self,
        expense_id: str,
        amount: Any = None,
        category: Optional[str] = None,
        split_percent: Any = None,
    ) -> Expense:
        """Update an expense in place, keeping its id, date and position.

        The split, when given, applies to ``amount`` if one is supplied and
        to the currently stored amount otherwise.

        Raises:
            NotFound: if ``expense_id`` is unknown.
            InvalidAmount, InvalidCategory, InvalidSplitPercent: on bad input.
            PersistenceUnavailable: if the backend write fails.
        """
        with self._lock:
            index = self._index_of(expense_id)
            current = self._expenses[index]

            changes = {}
            if amount is not None or split_percent is not None:
                raw_amount = current.amount if amount is None else amount
                changes['amount'] = compute_amount(raw_amount, split_percent)
            if category is not None:
                changes['category'] = validate_category(category, self.categories)

            updated = current.with_changes(**changes)
            expenses = list(self._expenses)
            expenses[index] = updated
            self._commit(expenses)
        logger.info("Edited expense %s: %.2f in %s", updated.id, updated.amount, updated.category)
        return updated

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Replace the in-memory collection with the backend's contents.

        Missing, unreadable or corrupt data leaves the store empty.
        """
        with self._lock:
            self._expenses = self._read()

    def persist(self) -> None:
        with self._lock:
            self._write(self._expenses)

    def _read(self) -> List[Expense]:
        try:
            blob = self.backend.get(self.key)
        except OSError as exc:
            logger.warning("Could not read stored expenses, starting empty: %s", exc)
            return []
        if blob is None:
            return []
        try:
            expenses = decode_expenses(blob)
        except ValueError as exc:
            logger.warning("Stored expenses are corrupt, starting empty: %s", exc)
            return []

        unknown = sorted({e.category for e in expenses if e.category not in self.categories})
        if unknown:
            logger.warning("Loaded expenses use unconfigured categories: %s", ", ".join(unknown))
        logger.info("Loaded %d expenses from key %r", len(expenses), self.key)
        return expenses

    def _write(self, expenses: Sequence[Expense]) -> None:
        try:
            self.backend.set(self.key, encode_expenses(expenses))
        except PersistenceUnavailable:
            logger.exception("Failed to persist %d expenses", len(expenses))
            raise
        except OSError as exc:
            logger.exception("Failed to persist %d expenses", len(expenses))
            raise PersistenceUnavailable(f"Could not save expenses: {exc}") from exc

    def _commit(self, expenses: List[Expense]) -> None:
        # Write first so memory never holds state the backend rejected.
        self._write(expenses)
        self._expenses = expenses

    def _index_of(self, expense_id: str) -> int:
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return index
        raise NotFound(f"No expense with id {expense_id!r}", expense_id)
