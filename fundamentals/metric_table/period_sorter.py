"""
Period Sorter.

Orders period labels chronologically with TTM forced last:
1. TTM vs TTM -> equal; TTM vs anything else -> TTM is later
2. Two plain integers ("2019", "2023") -> numeric
3. Two quarterly labels ("Mar 23", "Dec 22") -> year, then month index
4. Anything else -> lexical string order, surfaced as 'unordered_period'
"""

import re
from functools import cmp_to_key
from typing import Iterable, List, Optional, Set, Tuple

from config.constants import TTM_LABEL, MONTH_ABBREVIATIONS
from .calculator_base import CalculationResult, record_warning

_INTEGER_PATTERN = re.compile(r'^-?\d+$')
_QUARTER_PATTERN = re.compile(r'^([A-Za-z]{3}) (\d{2})$')


def _parse_quarter(label: str) -> Optional[Tuple[int, int]]:
    """(two-digit year, month index) for a 'Mon YY' label, else None."""
    match = _QUARTER_PATTERN.match(label)
    if not match or match.group(1) not in MONTH_ABBREVIATIONS:
        return None
    return int(match.group(2)), MONTH_ABBREVIATIONS.index(match.group(1))


def _compare(a: str, b: str) -> Tuple[int, bool]:
    """Comparison result plus whether the lexical fallback was used."""
    if a == b:
        return 0, False
    if a == TTM_LABEL:
        return 1, False
    if b == TTM_LABEL:
        return -1, False

    if _INTEGER_PATTERN.match(a) and _INTEGER_PATTERN.match(b):
        year_a, year_b = int(a), int(b)
        return (year_a > year_b) - (year_a < year_b), False

    quarter_a, quarter_b = _parse_quarter(a), _parse_quarter(b)
    if quarter_a is not None and quarter_b is not None:
        return (quarter_a > quarter_b) - (quarter_a < quarter_b), False

    return (a > b) - (a < b), True


def compare_periods(a: str, b: str) -> int:
    """
    Three-way comparison of two period labels.

    Returns:
        Negative if a is earlier, positive if later, 0 if equal
    """
    return _compare(a, b)[0]


def sort_periods(
    periods: Iterable[str],
    result: Optional[CalculationResult] = None
) -> List[str]:
    """
    Sort period labels chronologically, TTM last.

    Pairs that could only be ordered lexically are reported once each as
    'unordered_period' warnings.

    Args:
        periods: Period labels, any order
        result: Optional CalculationResult collecting warnings

    Returns:
        New sorted list (input is not modified)
    """
    fallback_pairs: Set[Tuple[str, str]] = set()

    def _key_compare(a: str, b: str) -> int:
        outcome, lexical = _compare(a, b)
        if lexical:
            fallback_pairs.add((min(a, b), max(a, b)))
        return outcome

    ordered = sorted(periods, key=cmp_to_key(_key_compare))

    for first, second in sorted(fallback_pairs):
        record_warning(
            result,
            'period',
            'unordered_period',
            f"No chronological order between '{first}' and '{second}', using lexical order"
        )
    return ordered
