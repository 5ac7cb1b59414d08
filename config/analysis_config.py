"""
Analysis Configuration
Centralized configuration for visible windows, range presets, and statistics thresholds.
"""

from typing import Dict, Optional

# --- Visible Window Defaults ---
# Number of most recent periods shown when no range or preset is given.
# TTM counts as one of these periods when present.
DEFAULT_VISIBLE_PERIODS: Dict[str, int] = {
    "annual": 5,
    "quarterly": 8,
}

# --- Range Presets ---
# Preset name -> number of periods ending at the last index.
# None means the entire timeline.
RANGE_PRESETS: Dict[str, Optional[int]] = {
    "1Y": 4,
    "5Y": 10,
    "10Y": 20,
    "All": None,
}

# --- Placeholder Timeline ---
# Used when no period can be extracted from the supplied records
DEFAULT_TIMELINE_LENGTH: Dict[str, int] = {
    "annual": 14,     # last 14 calendar years
    "quarterly": 16,  # last 4 years of quarter ends
}

# --- Statistics Thresholds ---
STATISTICS_THRESHOLDS = {
    # Minimum non-TTM points before total change / CAGR are reported
    "MIN_POINTS": 2,
    # TTM is treated as equal to the latest fiscal year within this relative tolerance
    "TTM_MATCH_TOLERANCE": 0.001,
}
