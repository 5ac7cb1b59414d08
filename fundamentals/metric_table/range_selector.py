"""
Range Selector.

Resolves the visible window [start, end] (inclusive) over a sorted period list.

Precedence:
1. Explicit start/end indices (clamped, reversed pairs normalised)
2. Named preset ("1Y", "5Y", "10Y", "All")
3. Default: most recent N periods (5 annual / 8 quarterly)

Never raises for bad indices or presets; anomalies are recorded instead.
"""

from typing import Optional, Sequence, Tuple

from config.analysis_config import RANGE_PRESETS
from config.settings import settings
from utils.logger import setup_logger
from utils.unified_schema import VisibleRange
from .calculator_base import CalculationResult, record_warning
from .period_extractor import validate_period_type

logger = setup_logger('range_selector')


def _lookup_preset(preset: str) -> Tuple[bool, Optional[int]]:
    """(found, period count) for a preset name, case-insensitive."""
    for name, count in RANGE_PRESETS.items():
        if name.lower() == preset.strip().lower():
            return True, count
    return False, None


def _clamp(index: int, last_index: int, label: str, result: Optional[CalculationResult]) -> int:
    if 0 <= index <= last_index:
        return index
    clamped = min(max(index, 0), last_index)
    record_warning(
        result,
        'visible_range',
        'out_of_range_window',
        f"{label} index {index} outside [0, {last_index}], clamped to {clamped}",
        value=float(index)
    )
    return clamped


def window_from_count(period_count: int, count: Optional[int]) -> VisibleRange:
    """Window of the last `count` periods (None = all)."""
    if period_count <= 0:
        return VisibleRange(start=0, end=0)
    end = period_count - 1
    if count is None:
        return VisibleRange(start=0, end=end)
    return VisibleRange(start=max(0, end - (count - 1)), end=end)


def select_range(
    periods: Sequence[str],
    period_type: str = 'annual',
    start: Optional[int] = None,
    end: Optional[int] = None,
    preset: Optional[str] = None,
    result: Optional[CalculationResult] = None
) -> VisibleRange:
    """
    Resolve the visible window over a sorted period list.

    Args:
        periods: Sorted period labels (TTM last if present)
        period_type: 'annual' or 'quarterly' (selects the default window size)
        start: Explicit first index; when only end is given, defaults to 0
        end: Explicit last index; when only start is given, defaults to the last index
        preset: Preset name, used when neither start nor end is given
        result: Optional CalculationResult collecting warnings

    Returns:
        VisibleRange with 0 <= start <= end <= max(len(periods) - 1, 0)
    """
    validate_period_type(period_type)
    period_count = len(periods)

    if period_count == 0:
        return VisibleRange(start=0, end=0)

    last_index = period_count - 1

    if start is not None or end is not None:
        start_index = _clamp(start if start is not None else 0, last_index, 'start', result)
        end_index = _clamp(end if end is not None else last_index, last_index, 'end', result)
        if start_index > end_index:
            logger.debug(f"Reversed window ({start_index}, {end_index}), swapping")
            start_index, end_index = end_index, start_index
        return VisibleRange(start=start_index, end=end_index)

    if preset is not None:
        found, count = _lookup_preset(preset)
        if found:
            return window_from_count(period_count, count)
        record_warning(
            result,
            'visible_range',
            'invalid_preset',
            f"Unknown range preset {preset!r} (expected one of {list(RANGE_PRESETS)}), using default window"
        )

    return window_from_count(period_count, settings.default_window(period_type))


def range_to_percentage(visible_range: VisibleRange, period_count: int) -> Tuple[float, float]:
    """
    Express a window as percentages of the timeline.

    Lets a user's window survive a change of period list (e.g. switching
    annual to quarterly). A single-period or empty timeline maps to (0, 100).

    Returns:
        (start_percent, end_percent), each in [0, 100]
    """
    if period_count <= 1:
        return 0.0, 100.0
    last_index = period_count - 1
    start = min(max(visible_range.start, 0), last_index)
    end = min(max(visible_range.end, 0), last_index)
    return start * 100 / last_index, end * 100 / last_index


def range_from_percentage(start_percent: float, end_percent: float, period_count: int) -> VisibleRange:
    """
    Re-apply a percentage window to a timeline of period_count periods.

    Percentages are clamped to [0, 100]; indices are rounded to the nearest period.
    """
    if period_count <= 1:
        return VisibleRange(start=0, end=0)
    last_index = period_count - 1

    def _to_index(percent: float) -> int:
        bounded = min(max(percent, 0.0), 100.0)
        return int(round(bounded * last_index / 100))

    start, end = _to_index(start_percent), _to_index(end_percent)
    if start > end:
        start, end = end, start
    return VisibleRange(start=start, end=end)


def describe_range(periods: Sequence[str], visible_range: VisibleRange) -> str:
    """Human-readable window description, e.g. '2019 to TTM'."""
    if not periods:
        return ''
    return f"{periods[visible_range.start]} to {periods[visible_range.end]}"
