"""Shared Streamlit state for the entry and report pages.

One :class:`ExpenseStore` is created per server process and shared by every
browser session; the store's own lock serializes mutations between them.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import streamlit as st

from . import config
from .storage import get_backend
from .store import ExpenseStore

FLASH_KEY = 'flash_messages'


@st.cache_resource
def get_store() -> ExpenseStore:
    config.configure_logging()
    config.ensure_data_directories()
    return ExpenseStore(get_backend(), categories=config.load_categories())


def flash(level: str, message: str) -> None:
    """Queue a message to show after the next rerun."""
    st.session_state.setdefault(FLASH_KEY, []).append((level, message))


def pop_flashes() -> List[Tuple[str, str]]:
    messages = st.session_state.get(FLASH_KEY, [])
    st.session_state[FLASH_KEY] = []
    return list(messages)


def render_flashes() -> None:
    for level, message in pop_flashes():
        if level == 'success':
            st.success(message)
        elif level == 'warning':
            st.warning(message)
        else:
            st.error(message)


def editing_id() -> Optional[str]:
    return st.session_state.get('editing_expense_id')


def set_editing_id(expense_id: Optional[str]) -> None:
    st.session_state['editing_expense_id'] = expense_id
