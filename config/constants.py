"""
Centralized constants for the metric table engine.
Stores period labels, provider record keys, and other magic values.
"""

from typing import Tuple

# --- Period Labels ---

# Trailing-twelve-months sentinel; always ordered after every other period
TTM_LABEL = "TTM"

PERIOD_TYPES: Tuple[str, ...] = ('annual', 'quarterly')

# Fixed month index used for "Mon YY" labels (0 = Jan)
MONTH_ABBREVIATIONS: Tuple[str, ...] = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)

# Calendar quarter-end months used for the placeholder quarterly timeline
QUARTER_END_MONTHS: Tuple[str, ...] = ('Mar', 'Jun', 'Sep', 'Dec')

# --- Provider Record Keys ---

# Keys that identify a record's period rather than carrying a metric value
RECORD_IDENTITY_KEYS: Tuple[str, ...] = ('date', 'period', 'calendarYear')

# Provider bookkeeping keys dropped when a raw record is parsed
PROVIDER_METADATA_KEYS: Tuple[str, ...] = (
    'symbol', 'reportedCurrency', 'cik', 'fillingDate', 'filingDate',
    'acceptedDate', 'link', 'finalLink',
)

# --- Table Output ---

# Written into a cell when an entity has no value for a (period, metric)
MISSING_VALUE = None

# Row keys are "{entity_id}{ROW_KEY_SEPARATOR}{metric_id}"
ROW_KEY_SEPARATOR = "_"

# Statement collections carried by an entity payload
STATEMENT_PAYLOAD_KEYS: Tuple[str, ...] = (
    'income', 'balance_sheet', 'cash_flow',
    'ttm_income', 'ttm_balance_sheet', 'ttm_cash_flow',
)
