import pytest

from fundamentals.metric_table.calculator_base import CalculationResult
from fundamentals.metric_table.statistics_calculator import StatisticsCalculator
from utils.unified_schema import DerivedStats


@pytest.fixture
def calc():
    return StatisticsCalculator()


# ─── calculate_stats ────────────────────────────────────────────────────

class TestCalculateStats:
    def test_two_years_fifty_percent(self, calc):
        stats = calc.calculate_stats([('2020', 100.0), ('2021', 150.0)], 'revenue').value
        assert isinstance(stats, DerivedStats)
        assert stats.total_change_percent == pytest.approx(50.0)
        assert stats.cagr_percent == pytest.approx(50.0)

    def test_zero_base_has_no_total_change(self, calc):
        result = calc.calculate_stats([('2020', 0.0), ('2021', 150.0)], 'revenue')
        assert result.value.total_change_percent is None
        assert result.value.cagr_percent is None
        assert 'negative_base' in [w.warning_type for w in result.warnings]

    def test_single_point_has_no_stats(self, calc):
        result = calc.calculate_stats([('2023', 42.0)], 'revenue')
        assert result.value == DerivedStats()
        assert [w.warning_type for w in result.warnings] == ['data_insufficient']

    def test_ttm_is_excluded(self, calc):
        stats = calc.calculate_stats(
            [('2021', 100.0), ('2022', 121.0), ('TTM', 500.0)], 'revenue'
        ).value
        assert stats.total_change_percent == pytest.approx(21.0)
        assert stats.cagr_percent == pytest.approx(21.0)

    def test_only_ttm_and_one_year_is_insufficient(self, calc):
        stats = calc.calculate_stats([('2023', 100.0), ('TTM', 120.0)], 'revenue').value
        assert stats.total_change_percent is None
        assert stats.cagr_percent is None

    def test_missing_values_are_skipped(self, calc):
        stats = calc.calculate_stats(
            [('2020', None), ('2021', 100.0), ('2022', 200.0)], 'revenue'
        ).value
        assert stats.total_change_percent == pytest.approx(100.0)

    def test_unsorted_series_is_ordered_first(self, calc):
        stats = calc.calculate_stats([('2022', 200.0), ('2021', 100.0)], 'revenue').value
        assert stats.total_change_percent == pytest.approx(100.0)


# ─── calculate_cagr ─────────────────────────────────────────────────────

class TestCagr:
    def test_years_come_from_period_labels(self, calc):
        result = calc.calculate_cagr([('2019', 100.0), ('2021', 121.0)], 'revenue')
        assert result.value == pytest.approx(10.0)
        assert result.intermediate_values['years'] == 2

    def test_non_year_labels_use_point_count(self, calc):
        series = [('Mar 23', 100.0), ('Jun 23', 110.0), ('Sep 23', 121.0)]
        result = calc.calculate_cagr(series, 'revenue')
        assert result.value == pytest.approx(10.0)
        assert result.intermediate_values['years'] == 2

    def test_negative_end_has_total_change_but_no_cagr(self, calc):
        stats = calc.calculate_stats([('2020', 100.0), ('2021', -50.0)], 'netIncome').value
        assert stats.total_change_percent == pytest.approx(-150.0)
        assert stats.cagr_percent is None

    def test_negative_start_uses_absolute_base(self, calc):
        stats = calc.calculate_stats([('2020', -100.0), ('2021', 50.0)], 'netIncome').value
        assert stats.total_change_percent == pytest.approx(150.0)
        assert stats.cagr_percent is None


# ─── Period and TTM growth ──────────────────────────────────────────────

class TestGrowth:
    def test_period_growth(self, calc):
        assert calc.calculate_period_growth(150.0, 100.0, 'revenueGrowth') == pytest.approx(50.0)
        assert calc.calculate_period_growth(-50.0, -100.0, 'netIncomeGrowth') == pytest.approx(50.0)
        assert calc.calculate_period_growth(None, 100.0, 'revenueGrowth') is None

    def test_period_growth_zero_base(self, calc):
        result = CalculationResult()
        assert calc.calculate_period_growth(10.0, 0.0, 'revenueGrowth', result) is None
        assert result.warnings[0].warning_type == 'negative_base'

    def test_ttm_matching_fiscal_year_reports_fiscal_growth(self, calc):
        result = calc.calculate_ttm_growth(1000.5, 1000.0, 800.0, 'revenueGrowth')
        assert result.value == pytest.approx(25.0)
        assert result.intermediate_values['basis'] == 'fiscal_year'

    def test_ttm_compared_with_previous_fiscal_year(self, calc):
        result = calc.calculate_ttm_growth(1100.0, 1000.0, 800.0, 'revenueGrowth')
        assert result.value == pytest.approx(37.5)
        assert result.intermediate_values['basis'] == 'ttm'

    def test_ttm_growth_needs_two_fiscal_years(self, calc):
        result = calc.calculate_ttm_growth(1100.0, 1000.0, None, 'revenueGrowth')
        assert result.value is None
        assert result.warnings[0].warning_type == 'data_insufficient'

    def test_ttm_growth_zero_previous_year(self, calc):
        assert calc.calculate_ttm_growth(1100.0, 1000.0, 0.0, 'revenueGrowth').value is None
