"""Top‑level package for the Expense Tracker.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``store`` – the persisted, ordered collection of expenses
* ``reports`` – pure functions that total a snapshot of expenses
* ``visualization`` – functions that generate Plotly figures

To run the Streamlit pages from the command line you can execute:

```bash
python run_dashboard.py
```
"""

from . import reports  # noqa: F401  # re-exported for convenience
from .errors import (  # noqa: F401
    ExpenseError,
    InvalidAmount,
    InvalidCategory,
    InvalidSplitPercent,
    NotFound,
    PersistenceUnavailable,
    ValidationError,
)
from .models import Expense  # noqa: F401
from .storage import InMemoryStore, JsonFileStore  # noqa: F401
from .store import ExpenseStore  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "Expense",
    "ExpenseStore",
    "InMemoryStore",
    "JsonFileStore",
    "reports",
    "ExpenseError",
    "ValidationError",
    "InvalidAmount",
    "InvalidCategory",
    "InvalidSplitPercent",
    "NotFound",
    "PersistenceUnavailable",
]
