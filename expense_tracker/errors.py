"""Domain-specific exceptions for the expense store and its persistence."""

from __future__ import annotations

from typing import Any


class ExpenseError(Exception):
    """Base class for every error raised by the expense tracker."""


class ValidationError(ExpenseError, ValueError):
    """Raised when provided data does not meet validation requirements."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class InvalidAmount(ValidationError):
    """Amount is non-numeric, not finite, or not strictly positive."""


class InvalidCategory(ValidationError):
    """Category is not one of the configured labels."""


class InvalidSplitPercent(ValidationError):
    """Split percentage is non-numeric or outside [0, 100]."""


class NotFound(ExpenseError, LookupError):
    """Raised when an expense cannot be located by id or position."""

    def __init__(self, message: str, expense_id: Any = None):
        super().__init__(message)
        self.expense_id = expense_id


class PersistenceUnavailable(ExpenseError, IOError):
    """Raised when the storage backend cannot be read or written."""
