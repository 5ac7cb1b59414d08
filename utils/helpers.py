"""
Common helper utilities for the application.
"""

import re
from datetime import datetime
from typing import Any, Optional
import pandas as pd

_YEAR_PATTERN = re.compile(r'^\d{4}$')
_YEAR_IN_DATE = re.compile(r'\d{4}')


def safe_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """
    Safely convert value to integer.

    Strings must be plain integers ("2023"); "2023.5" or "Mar 23" return default.

    Args:
        value: Value to convert
        default: Default value if conversion fails

    Returns:
        Integer value or default
    """
    try:
        if pd.isna(value):
            return default
        if isinstance(value, str):
            return int(value.strip())
        return int(value)
    except (ValueError, TypeError):
        return default


def parse_year(value: Any) -> Optional[int]:
    """
    Parse a four-digit calendar year from an int or string.

    Returns:
        Year as int, or None if value is not a four-digit year
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not _YEAR_PATTERN.match(text):
        return None
    return int(text)


def format_large_number(value: float, decimals: int = 2) -> str:
    """
    Format large numbers with appropriate suffix (K, M, B, T).

    Args:
        value: Number to format
        decimals: Number of decimal places

    Returns:
        Formatted string (e.g., '1.23B')
    """
    if abs(value) >= 1e12:
        return f"{value / 1e12:.{decimals}f}T"
    elif abs(value) >= 1e9:
        return f"{value / 1e9:.{decimals}f}B"
    elif abs(value) >= 1e6:
        return f"{value / 1e6:.{decimals}f}M"
    elif abs(value) >= 1e3:
        return f"{value / 1e3:.{decimals}f}K"
    else:
        return f"{value:.{decimals}f}"


def parse_date(date_str: Optional[str]) -> Optional[datetime]:
    """
    Parse date string to datetime object.

    Args:
        date_str: Date string to parse (e.g. '2023-09-30')

    Returns:
        Datetime object or None if parsing fails or the string has no four-digit year
    """
    if not date_str or not isinstance(date_str, str):
        return None
    # pandas fills a missing year with 1 (e.g. '9/30', 'Sep')
    if not _YEAR_IN_DATE.search(date_str):
        return None

    try:
        parsed = pd.to_datetime(date_str)
    except (ValueError, TypeError, OverflowError):
        return None

    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()
