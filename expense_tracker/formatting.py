"""Formatting utilities for currency and text display."""

from __future__ import annotations

from typing import Union


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with two decimals and thousands separators.

    Args:
        amount: The amount to format
        include_sign: Whether to include the dollar sign

    Returns:
        Formatted currency string (e.g., "$1,234.56" or "1,234.56")

    Example:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(1234.5, include_sign=False)
        '1,234.50'
    """
    formatted = f"{amount:,.2f}"
    return f"${formatted}" if include_sign else formatted


def escape_dollar_for_markdown(amount: Union[float, int]) -> str:
    """Format an amount for ``st.markdown`` without triggering LaTeX.

    Markdown treats paired ``$`` signs as math delimiters, so the sign is
    escaped.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\\\$1,234.56'
    """
    return format_currency(amount).replace("$", "\\$")


def format_split(split_percent: Union[float, int, None]) -> str:
    if split_percent is None:
        return "Not split"
    return f"Split Percentage: {int(round(split_percent))}%"
