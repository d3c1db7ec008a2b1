"""Enter Expense page - main entry point for the Streamlit multi-page app.

Pages in the pages/ directory appear in the sidebar automatically.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from expense_tracker.errors import NotFound, PersistenceUnavailable, ValidationError
from expense_tracker.formatting import escape_dollar_for_markdown, format_currency, format_split
from expense_tracker.models import Expense
from expense_tracker.reports import total_sum
from expense_tracker.session import (
    editing_id,
    flash,
    get_store,
    render_flashes,
    set_editing_id,
)
from expense_tracker.store import ExpenseStore

RESTART_WARNING = "Changes may not survive a restart."


def main():
    """Render the Enter Expense page."""
    st.set_page_config(page_title="Enter Expense", page_icon="💵", layout="centered")
    store = get_store()

    st.header("💵 Enter Expense")
    render_flashes()

    _render_entry_form(store)
    st.page_link("pages/1_📈_Reports.py", label="View Report", icon="📈")

    st.divider()
    _render_expense_list(store)


def _render_entry_form(store: ExpenseStore) -> None:
    st.text_input("Amount", key="amount_input", placeholder="Enter amount")
    st.selectbox("Category", store.categories, key="category_input")
    is_split = st.checkbox("Split Amount?", key="split_input")
    if is_split:
        percent = st.slider("Split Percentage", 0, 100, 50, step=1, key="split_percent_input")
        st.caption(format_split(percent))
    st.button("Save Expense", type="primary", on_click=_save_expense, args=(store,))


def _save_expense(store: ExpenseStore) -> None:
    state = st.session_state
    split = state.get("split_percent_input", 50) if state.get("split_input") else None
    try:
        expense = store.add(state.get("amount_input", ""), state.get("category_input"), split)
    except ValidationError as exc:
        flash('error', str(exc))
        return
    except PersistenceUnavailable as exc:
        flash('warning', f"Expense was not saved: {exc}. {RESTART_WARNING}")
        return
    state["amount_input"] = ""
    flash('success', f"Saved {format_currency(expense.amount)} in {expense.category}")


def _render_expense_list(store: ExpenseStore) -> None:
    expenses = store.all()
    st.subheader(f"Expenses ({len(expenses)})")
    if not expenses:
        st.info("No expenses recorded yet.")
        return
    st.caption(f"Total: {format_currency(total_sum(expenses))}")

    for expense in expenses:
        if editing_id() == expense.id:
            _render_edit_form(store, expense)
            continue
        amount_col, info_col, edit_col, delete_col = st.columns([2, 4, 1, 1])
        amount_col.markdown(f"**{escape_dollar_for_markdown(expense.amount)}**")
        info_col.caption(f"{expense.category} · {expense.date:%Y-%m-%d %H:%M}")
        edit_col.button("Edit", key=f"edit_{expense.id}", on_click=set_editing_id, args=(expense.id,))
        delete_col.button(
            "Delete",
            key=f"delete_{expense.id}",
            on_click=_delete_expense,
            args=(store, expense),
        )


def _render_edit_form(store: ExpenseStore, expense: Expense) -> None:
    with st.form(key=f"edit_form_{expense.id}"):
        st.markdown(f"**Editing expense from {expense.date:%Y-%m-%d %H:%M}**")
        amount = st.text_input("Amount", value=str(expense.amount))
        category_index = (
            store.categories.index(expense.category) if expense.category in store.categories else 0
        )
        category = st.selectbox("Category", store.categories, index=category_index)
        is_split = st.checkbox("Split Amount?")
        percent = st.slider("Split Percentage", 0, 100, 50, step=1)
        st.caption("The split applies to the amount shown above, which is already net of any earlier split.")
        save_col, cancel_col = st.columns(2)
        saved = save_col.form_submit_button("Save Changes", type="primary")
        cancelled = cancel_col.form_submit_button("Cancel")

    if cancelled:
        set_editing_id(None)
        st.rerun()
    if saved:
        try:
            store.edit(expense.id, amount=amount, category=category, split_percent=percent if is_split else None)
        except (ValidationError, NotFound) as exc:
            st.error(str(exc))
            return
        except PersistenceUnavailable as exc:
            st.warning(f"Expense was not updated: {exc}. {RESTART_WARNING}")
            return
        set_editing_id(None)
        flash('success', "Expense updated")
        st.rerun()


def _delete_expense(store: ExpenseStore, expense: Expense) -> None:
    try:
        store.remove(expense.id)
    except NotFound as exc:
        flash('error', str(exc))
        return
    except PersistenceUnavailable as exc:
        flash('warning', f"Expense was not deleted: {exc}. {RESTART_WARNING}")
        return
    flash('success', f"Deleted {format_currency(expense.amount)} in {expense.category}")


if __name__ == "__main__":
    main()
