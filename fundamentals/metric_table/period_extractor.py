"""
Period Extractor.

Maps raw statement records to canonical period labels:
1. TTM-marked records -> "TTM" (regardless of period type)
2. Annual records -> four-digit calendar year ("2023")
3. Quarterly records -> short month + two-digit year ("Sep 23")

Records whose period cannot be determined are dropped with a
'malformed_period' warning.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from config.analysis_config import DEFAULT_TIMELINE_LENGTH
from config.constants import TTM_LABEL, PERIOD_TYPES, MONTH_ABBREVIATIONS, QUARTER_END_MONTHS
from utils.helpers import parse_date, parse_year
from utils.unified_schema import RawStatementRecord
from .calculator_base import CalculationResult, record_warning


def validate_period_type(period_type: str) -> str:
    """Raise ValueError unless period_type is 'annual' or 'quarterly'."""
    if period_type not in PERIOD_TYPES:
        raise ValueError(f"period_type must be one of {PERIOD_TYPES}, got {period_type!r}")
    return period_type


def format_quarter_label(month: int, year: int) -> str:
    """Quarterly label for a calendar month (1-12) and year, e.g. (9, 2023) -> 'Sep 23'."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}"


def period_label(
    record: RawStatementRecord,
    period_type: str,
    result: Optional[CalculationResult] = None
) -> Optional[str]:
    """
    Canonical period label for a single record.

    Args:
        record: Raw statement record
        period_type: 'annual' or 'quarterly'
        result: Optional CalculationResult collecting 'malformed_period' warnings

    Returns:
        Period label, or None if the record's period is unparsable
    """
    validate_period_type(period_type)

    if record.is_ttm:
        return TTM_LABEL

    parsed = parse_date(record.date)

    if period_type == 'annual':
        if parsed is not None:
            return str(parsed.year)
        # Fall back to an explicit numeric period
        year = parse_year(record.calendar_year)
        if year is None:
            year = parse_year(record.period)
        if year is not None:
            return str(year)
    elif parsed is not None:
        return format_quarter_label(parsed.month, parsed.year)

    record_warning(
        result,
        'period',
        'malformed_period',
        f"Dropping record with unparsable period (date={record.date!r}, "
        f"period={record.period!r}, calendarYear={record.calendar_year!r})"
    )
    return None


def label_records(
    records: Iterable[RawStatementRecord],
    period_type: str,
    result: Optional[CalculationResult] = None
) -> List[Tuple[str, RawStatementRecord]]:
    """(label, record) pairs in input order, malformed records dropped."""
    validate_period_type(period_type)

    labelled = []
    for record in records:
        label = period_label(record, period_type, result)
        if label is not None:
            labelled.append((label, record))
    return labelled


def extract_periods(
    records: Iterable[RawStatementRecord],
    period_type: str,
    result: Optional[CalculationResult] = None
) -> List[str]:
    """
    Deduplicated period labels in first-seen order (unsorted).

    Args:
        records: Raw statement records, any order
        period_type: 'annual' or 'quarterly'
        result: Optional CalculationResult collecting warnings

    Returns:
        Unique labels; dropped records contribute nothing
    """
    labels: List[str] = []
    seen = set()
    for label, _ in label_records(records, period_type, result):
        if label in seen:
            continue
        seen.add(label)
        labels.append(label)
    return labels


def default_periods(period_type: str, reference_date: Optional[datetime] = None) -> List[str]:
    """
    Placeholder timeline used when no period could be extracted.

    Annual: the last 14 calendar years up to the reference year.
    Quarterly: quarter-end labels (Mar/Jun/Sep/Dec) over the last 4 years.

    Args:
        period_type: 'annual' or 'quarterly'
        reference_date: Date the timeline ends at (default: now)

    Returns:
        Oldest-first list of labels
    """
    validate_period_type(period_type)
    reference_year = (reference_date or datetime.now()).year

    if period_type == 'annual':
        count = DEFAULT_TIMELINE_LENGTH['annual']
        return [str(year) for year in range(reference_year - count + 1, reference_year + 1)]

    years = DEFAULT_TIMELINE_LENGTH['quarterly'] // len(QUARTER_END_MONTHS)
    return [
        f"{month} {year % 100:02d}"
        for year in range(reference_year - years + 1, reference_year + 1)
        for month in QUARTER_END_MONTHS
    ]
