"""Configuration management for the expense tracker.

This module centralizes all configuration values including paths,
the category list, logging defaults and environment variable overrides.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

# Base project root - assumes this file is in expense_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("EXPENSES_DATA_DIR", _PROJECT_ROOT / "data"))

# Key under which the whole expense collection is stored
STORAGE_KEY = os.getenv("EXPENSES_STORAGE_KEY", "expenses")

# Category list shipped with the package
CATEGORIES_FILE = Path(
    os.getenv("EXPENSES_CATEGORIES_FILE", Path(__file__).parent / "categories.json")
)

DEFAULT_CATEGORIES: List[str] = [
    "Housing & Utilities",
    "Food",
    "Entertainment",
    "Transportation",
    "Other",
]

LOG_LEVEL = os.getenv("EXPENSES_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def load_categories(path: Optional[Path] = None) -> List[str]:
    """Load the ordered category list.

    Args:
        path: Optional JSON file holding a list of category labels.
              Defaults to ``CATEGORIES_FILE``.

    Returns:
        List of unique, non-empty labels in file order. Falls back to
        ``DEFAULT_CATEGORIES`` when the file is missing or not a list of
        strings.

    Example:
        >>> load_categories()[0]
        'Housing & Utilities'
    """
    target = path or CATEGORIES_FILE
    if not target.exists():
        return list(DEFAULT_CATEGORIES)
    try:
        with target.open('r', encoding='utf-8') as handle:
            data = json.load(handle)
    except (json.JSONDecodeError, OSError):
        return list(DEFAULT_CATEGORIES)
    if not isinstance(data, list):
        return list(DEFAULT_CATEGORIES)

    categories: List[str] = []
    for item in data:
        if not isinstance(item, str):
            continue
        label = item.strip()
        if label and label not in categories:
            categories.append(label)
    return categories or list(DEFAULT_CATEGORIES)


def configure_logging(level: Union[str, int, None] = None) -> None:
    """Install a single stream handler on the package logger."""
    logger = logging.getLogger("expense_tracker")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level or LOG_LEVEL)
