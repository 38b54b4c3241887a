# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Safe Formatters - Defensive formatting functions for financial metrics.

All functions handle None, NaN, Inf gracefully with consistent "N/A" output,
so a display string never carries "nan" or "inf".

Usage:
    from fiscalmetrics.domain.services.safe_formatters import (
        format_currency_value,
        format_percentage,
        format_ratio,
        format_basis_points,
    )
"""

import math
from decimal import Decimal
from typing import Any, Mapping, Optional

NOT_AVAILABLE = "N/A"

DEFAULT_CURRENCY_SYMBOLS = {
    "USD": "$",
    "INR": "₹",
    "EUR": "€",
    "GBP": "£",
}

# (threshold, divisor, suffix), largest first
_SCALE_STEPS = (
    (1e12, 1e12, "T"),
    (1e9, 1e9, "B"),
    (1e6, 1e6, "M"),
    (1e3, 1e3, "K"),
)


def is_valid_number(value: Any) -> bool:
    """
    Check if value is a valid, finite number.

    Examples:
        >>> is_valid_number(123.45)
        True
        >>> is_valid_number(None)
        False
        >>> is_valid_number(float('nan'))
        False
        >>> is_valid_number(float('inf'))
        False
    """
    if value is None:
        return False

    try:
        # Reject booleans (they convert to 0/1 which is misleading)
        if isinstance(value, bool):
            return False

        num = float(value)
        return not (math.isnan(num) or math.isinf(num))
    except (TypeError, ValueError):
        return False


def to_finite_float(value: Any) -> Optional[float]:
    """
    Convert int/float/Decimal/numeric string to a finite float, else None.

    Examples:
        >>> to_finite_float(Decimal("1.5"))
        1.5
        >>> to_finite_float(float('nan')) is None
        True
    """
    if isinstance(value, Decimal) and not value.is_finite():
        return None
    if not is_valid_number(value):
        return None
    return float(value)


def resolve_currency_symbol(currency: Optional[str], symbols: Optional[Mapping[str, str]] = None) -> str:
    """
    Map a currency code to its display symbol.

    Missing codes default to USD; unknown codes are shown as-is, so a value
    that is already a symbol passes through unchanged.

    Examples:
        >>> resolve_currency_symbol(None)
        '$'
        >>> resolve_currency_symbol("EUR")
        '€'
        >>> resolve_currency_symbol("CHF")
        'CHF'
    """
    table = symbols if symbols is not None else DEFAULT_CURRENCY_SYMBOLS
    if currency is None or not str(currency).strip():
        return table.get("USD", "$")
    code = str(currency).strip()
    return table.get(code.upper(), code)


def _scale(abs_val: float):
    for threshold, divisor, suffix in _SCALE_STEPS:
        if abs_val >= threshold:
            return divisor, suffix
    return 1.0, ""


def format_currency_value(value: Any, currency: str = "$", fallback: str = NOT_AVAILABLE) -> str:
    """
    Format a currency amount with a T/B/M/K suffix and two decimals.

    Examples:
        >>> format_currency_value(1_500_000_000.0, "$")
        '$1.50B'
        >>> format_currency_value(950_000.0, "$")
        '$950.00K'
        >>> format_currency_value(-2_500_000.0, "$")
        '$-2.50M'
        >>> format_currency_value(None)
        'N/A'
    """
    num = to_finite_float(value)
    if num is None:
        return fallback

    # Scale is picked on the magnitude; the sign stays on the number
    divisor, suffix = _scale(abs(num))
    return f"{currency}{num / divisor:.2f}{suffix}"


def format_percentage(value: Any, decimals: int = 2, fallback: str = NOT_AVAILABLE) -> str:
    """
    Format an already-scaled percentage.

    Examples:
        >>> format_percentage(40.0)
        '40.00%'
        >>> format_percentage(None)
        'N/A'
    """
    num = to_finite_float(value)
    if num is None:
        return fallback
    return f"{num:.{decimals}f}%"


def format_ratio(value: Any, decimals: int = 2, fallback: str = NOT_AVAILABLE) -> str:
    """
    Format a multiple such as P/E.

    Examples:
        >>> format_ratio(30.0)
        '30.00x'
    """
    num = to_finite_float(value)
    if num is None:
        return fallback
    return f"{num:.{decimals}f}x"


def format_basis_points(value: Any, fallback: str = NOT_AVAILABLE) -> str:
    """
    Format a delta already expressed in basis points.

    Examples:
        >>> format_basis_points(250.4)
        '250 bps'
    """
    num = to_finite_float(value)
    if num is None:
        return fallback
    return f"{num:.0f} bps"


def format_shares_millions(value: Any, fallback: str = NOT_AVAILABLE) -> str:
    """
    Format a share count in millions.

    Examples:
        >>> format_shares_millions(15_550_000)
        '15.55M'
    """
    num = to_finite_float(value)
    if num is None:
        return fallback
    return f"{num / 1_000_000:.2f}M"
