"""
Growth Statistics Calculators.

Calculates, per (entity, metric) series:
1. Total change (%) between the first and last non-TTM points
2. CAGR (%) between the same points
3. Single-step period growth (%) for derived growth metrics
4. TTM growth (%) against the fiscal-year history

All percentages are in percent units (50.0 = +50%).
"""

from typing import List, Optional, Sequence, Tuple

from config.analysis_config import STATISTICS_THRESHOLDS
from config.constants import TTM_LABEL
from config.settings import settings
from utils.helpers import safe_int
from utils.numeric_utils import clean_numeric, percent_change
from utils.unified_schema import DerivedStats
from .calculator_base import CalculatorBase, CalculationResult
from .period_sorter import sort_periods

MetricPoint = Tuple[str, Optional[float]]


class StatisticsCalculator(CalculatorBase):
    """Calculates growth statistics over metric series."""

    def _growth_basis(
        self,
        series: Sequence[MetricPoint],
        result: CalculationResult
    ) -> List[Tuple[str, float]]:
        """Non-TTM points with a value, oldest first."""
        values = {}
        for period, value in series:
            cleaned = clean_numeric(value)
            if period == TTM_LABEL or cleaned is None:
                continue
            values[period] = cleaned
        ordered = sort_periods(values.keys(), result)
        return [(period, values[period]) for period in ordered]

    def _has_enough_points(
        self,
        points: List[Tuple[str, float]],
        metric_name: str,
        result: CalculationResult
    ) -> bool:
        min_points = STATISTICS_THRESHOLDS['MIN_POINTS']
        if len(points) < min_points:
            result.add_warning(
                metric_name,
                'data_insufficient',
                f'Need at least {min_points} non-TTM periods, got {len(points)}',
                'info'
            )
            return False
        return True

    def calculate_total_change(
        self,
        series: Sequence[MetricPoint],
        metric_name: str
    ) -> CalculationResult:
        """
        Calculate total percent change over the full non-TTM series.

        Formula:
            total_change = (last - first) / |first| * 100

        Args:
            series: (period, value) points, any order, TTM allowed
            metric_name: Metric name for warnings

        Returns:
            CalculationResult with total change, or None if fewer than two
            points or first == 0
        """
        result = CalculationResult(value=None)
        points = self._growth_basis(series, result)
        if not self._has_enough_points(points, metric_name, result):
            return result

        (first_period, first_value), (last_period, last_value) = points[0], points[-1]

        if first_value == 0:
            result.add_warning(
                metric_name,
                'negative_base',
                f'Base value at {first_period} is 0, total change undefined',
                'info',
                first_value
            )
            return result

        result.value = (last_value - first_value) / abs(first_value) * 100
        result.intermediate_values = {
            'first_period': first_period,
            'last_period': last_period,
            'first_value': first_value,
            'last_value': last_value,
        }
        return result

    def calculate_cagr(
        self,
        series: Sequence[MetricPoint],
        metric_name: str
    ) -> CalculationResult:
        """
        Calculate CAGR over the full non-TTM series.

        Formula:
            years = int(last_period) - int(first_period)   (if both are years and > 0)
                    else number_of_points - 1
            CAGR = ((last / first) ^ (1 / years) - 1) * 100

        Requires first > 0 and last > 0.

        Args:
            series: (period, value) points, any order, TTM allowed
            metric_name: Metric name for warnings

        Returns:
            CalculationResult with CAGR in percent, or None
        """
        result = CalculationResult(value=None)
        points = self._growth_basis(series, result)
        if not self._has_enough_points(points, metric_name, result):
            return result

        (first_period, first_value), (last_period, last_value) = points[0], points[-1]

        if first_value <= 0 or last_value <= 0:
            result.add_warning(
                metric_name,
                'negative_base',
                f'CAGR needs positive endpoints, got {first_value:.2f} ({first_period}) '
                f'and {last_value:.2f} ({last_period})',
                'info',
                first_value if first_value <= 0 else last_value
            )
            return result

        first_year = safe_int(first_period, default=None)
        last_year = safe_int(last_period, default=None)
        years = None
        if first_year is not None and last_year is not None:
            years = last_year - first_year
        if years is None or years <= 0:
            years = len(points) - 1

        ratio = self.safe_divide(last_value, first_value, metric_name, result)
        if ratio is None:
            return result

        result.value = (ratio ** (1 / years) - 1) * 100
        result.intermediate_values = {
            'first_period': first_period,
            'last_period': last_period,
            'years': years,
        }
        return result

    def calculate_stats(
        self,
        series: Sequence[MetricPoint],
        metric_name: str
    ) -> CalculationResult:
        """
        Calculate total change and CAGR together.

        Returns:
            CalculationResult whose value is a DerivedStats
        """
        result = CalculationResult(value=None)

        total_change = self.calculate_total_change(series, metric_name)
        cagr = self.calculate_cagr(series, metric_name)
        result.extend(total_change)
        for warning in cagr.warnings:
            # Shared-basis anomalies are already reported by total change
            if warning.warning_type not in ('data_insufficient', 'unordered_period'):
                result.warnings.append(warning)

        result.value = DerivedStats(
            total_change_percent=total_change.value,
            cagr_percent=cagr.value,
        )
        result.intermediate_values = {**total_change.intermediate_values, **cagr.intermediate_values}
        return result

    def calculate_period_growth(
        self,
        current: Optional[float],
        previous: Optional[float],
        metric_name: str,
        result: Optional[CalculationResult] = None
    ) -> Optional[float]:
        """
        Single-step growth: (current - previous) / |previous| * 100.

        Returns None when either value is missing or previous is 0; a zero
        base is recorded on result when given.
        """
        if clean_numeric(previous) == 0 and result is not None:
            result.add_warning(
                metric_name,
                'negative_base',
                'Previous period value is 0, growth undefined',
                'info',
                0.0
            )
        return percent_change(current, previous)

    def calculate_ttm_growth(
        self,
        ttm_value: Optional[float],
        latest_annual: Optional[float],
        previous_annual: Optional[float],
        metric_name: str
    ) -> CalculationResult:
        """
        Calculate growth for the TTM period.

        If TTM equals the latest fiscal year within tolerance (the latest
        fiscal year just closed), report that fiscal year's growth;
        otherwise compare TTM with the previous fiscal year.

        Args:
            ttm_value: Trailing-twelve-months value of the base metric
            latest_annual: Most recent fiscal year value
            previous_annual: Fiscal year before latest_annual
            metric_name: Metric name for warnings

        Returns:
            CalculationResult with growth in percent, or None
        """
        result = CalculationResult(value=None)

        ttm_value = clean_numeric(ttm_value)
        latest_annual = clean_numeric(latest_annual)
        previous_annual = clean_numeric(previous_annual)

        if ttm_value is None or latest_annual is None or previous_annual is None:
            result.add_warning(
                metric_name,
                'data_insufficient',
                'TTM growth needs TTM and two fiscal years of data',
                'info'
            )
            return result

        if previous_annual == 0:
            result.add_warning(
                metric_name,
                'negative_base',
                'Previous fiscal year value is 0, TTM growth undefined',
                'info',
                previous_annual
            )
            return result

        tolerance = abs(latest_annual) * settings.TTM_TOLERANCE
        matches_fiscal_year = abs(ttm_value - latest_annual) <= tolerance

        current = latest_annual if matches_fiscal_year else ttm_value
        result.value = percent_change(current, previous_annual)
        result.intermediate_values = {
            'basis': 'fiscal_year' if matches_fiscal_year else 'ttm',
            'tolerance': tolerance,
        }
        return result
