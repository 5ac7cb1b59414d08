"""
Numeric Utilities - Centralized numeric value handling.

Provides standardized functions for:
1. Cleaning numeric values (handling NaN/Inf/None)
2. Coercing provider values that arrive as formatted strings
3. Safe division and percent change
4. Safe formatting for display

Financial providers mix raw numbers with strings such as "$1,234.5" or
" 12.0 ". Every value entering the metric table passes through
coerce_financial_value() so that the rest of the engine only sees float or None.
"""

import math
import re
from typing import Any, Optional

# Everything except digits, decimal point and minus sign is stripped from strings
_NON_NUMERIC_CHARS = re.compile(r'[^0-9.\-]')


def is_valid_number(value: Any) -> bool:
    """
    Check if a value is a valid, finite number.

    Args:
        value: Any value to check

    Returns:
        True if value is a valid finite number, False otherwise

    Examples:
        >>> is_valid_number(3.14)
        True
        >>> is_valid_number(float('nan'))
        False
        >>> is_valid_number(None)
        False
    """
    if value is None or isinstance(value, bool):
        return False

    try:
        float_val = float(value)
        return not (math.isnan(float_val) or math.isinf(float_val))
    except (ValueError, TypeError):
        return False


def clean_numeric(value: Any) -> Optional[float]:
    """
    Clean a numeric value, returning None for invalid values.

    This is the core sanitization function. Use before any calculations
    to ensure NaN/Inf/None values are handled consistently.

    Args:
        value: Raw value (can be float, int, string number, or None/NaN)

    Returns:
        Float value if valid, None if value is missing/invalid

    Examples:
        >>> clean_numeric(3.14)
        3.14
        >>> clean_numeric("42.5")
        42.5
        >>> clean_numeric(float('nan'))
        None
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        float_value = float(value)
        if math.isnan(float_value) or math.isinf(float_value):
            return None
        return float_value
    except (ValueError, TypeError):
        return None


def coerce_financial_value(value: Any) -> Optional[float]:
    """
    Coerce a provider field value to float.

    Numbers are cleaned as-is. Strings have thousands separators, currency
    symbols and whitespace removed before parsing.

    Examples:
        >>> coerce_financial_value("$1,234.50")
        1234.5
        >>> coerce_financial_value(" -12 ")
        -12.0
        >>> coerce_financial_value("N/A")
        None
    """
    if isinstance(value, str):
        stripped = _NON_NUMERIC_CHARS.sub('', value)
        if stripped in ('', '-', '.', '-.'):
            return None
        return clean_numeric(stripped)
    return clean_numeric(value)


def safe_divide(
    numerator: Any,
    denominator: Any,
    default: Optional[float] = None
) -> Optional[float]:
    """
    Safely perform division, handling None/NaN/zero denominators.

    Examples:
        >>> safe_divide(10, 2)
        5.0
        >>> safe_divide(10, 0)
        None
    """
    clean_num = clean_numeric(numerator)
    clean_den = clean_numeric(denominator)

    if clean_num is None or clean_den is None or clean_den == 0:
        return default

    return clean_num / clean_den


def percent_change(current: Any, previous: Any) -> Optional[float]:
    """
    Percent change from previous to current, relative to abs(previous).

    Returns:
        Change in percent (50.0 = +50%), or None when either value is
        missing or previous is zero
    """
    clean_current = clean_numeric(current)
    clean_previous = clean_numeric(previous)

    if clean_current is None or clean_previous is None or clean_previous == 0:
        return None

    return (clean_current - clean_previous) / abs(clean_previous) * 100


def safe_format(
    value: Any,
    format_spec: str = ".2f",
    default: str = "N/A",
    suffix: str = ""
) -> str:
    """
    Safely format a numeric value for display.

    Args:
        value: Value to format
        format_spec: Python format specification (e.g., ".2f", ",.0f")
        default: String to return if value is invalid
        suffix: Appended to valid values (e.g., "%")

    Examples:
        >>> safe_format(12.345, ".1f", suffix="%")
        '12.3%'
        >>> safe_format(None)
        'N/A'
    """
    cleaned = clean_numeric(value)
    if cleaned is None:
        return default

    return f"{format(cleaned, format_spec)}{suffix}"
