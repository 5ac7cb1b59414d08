import pytest

from config.analysis_config import RANGE_PRESETS
from fundamentals.metric_table.calculator_base import CalculationResult
from fundamentals.metric_table.range_selector import (
    describe_range,
    range_from_percentage,
    range_to_percentage,
    select_range,
)
from utils.unified_schema import VisibleRange

ANNUAL_WITH_TTM = ['2019', '2020', '2021', '2022', '2023', 'TTM']


# ─── Defaults ───────────────────────────────────────────────────────────

class TestDefaultWindow:
    def test_annual_default_is_last_five_including_ttm(self):
        assert select_range(ANNUAL_WITH_TTM, 'annual').as_tuple() == (1, 5)

    def test_four_years_plus_ttm_shows_everything(self):
        assert select_range(ANNUAL_WITH_TTM[1:], 'annual').as_tuple() == (0, 4)

    def test_quarterly_default_is_last_eight(self):
        periods = [f'Q{i}' for i in range(12)]
        assert select_range(periods, 'quarterly').as_tuple() == (4, 11)

    def test_empty_and_single_period(self):
        assert select_range([], 'annual').as_tuple() == (0, 0)
        assert select_range(['2023'], 'annual').as_tuple() == (0, 0)
        assert select_range(['TTM'], 'quarterly', preset='10Y').as_tuple() == (0, 0)


# ─── Presets ────────────────────────────────────────────────────────────

class TestPresets:
    def test_five_years_covers_short_history(self):
        assert select_range(ANNUAL_WITH_TTM, preset='5Y').as_tuple() == (0, 5)

    def test_one_year_is_last_four_periods(self):
        window = select_range(ANNUAL_WITH_TTM, preset='1Y')
        assert ANNUAL_WITH_TTM[window.start:window.end + 1] == ['2021', '2022', '2023', 'TTM']

    def test_ten_years_on_long_timeline(self):
        periods = [str(year) for year in range(1990, 2024)]
        assert select_range(periods, preset='10Y').as_tuple() == (14, 33)

    def test_all_is_case_insensitive(self):
        assert select_range(ANNUAL_WITH_TTM, preset='all').as_tuple() == (0, 5)

    def test_unknown_preset_falls_back_to_default(self):
        result = CalculationResult()
        window = select_range(ANNUAL_WITH_TTM, 'annual', preset='3M', result=result)
        assert window.as_tuple() == (1, 5)
        assert result.warnings[0].warning_type == 'invalid_preset'

    @pytest.mark.parametrize('preset', list(RANGE_PRESETS) + [None])
    def test_bounds_hold_for_every_length(self, preset):
        for length in range(1, 30):
            periods = [str(2000 + i) for i in range(length)]
            window = select_range(periods, preset=preset)
            assert 0 <= window.start <= window.end <= length - 1
            assert window.end == length - 1


# ─── Explicit indices ───────────────────────────────────────────────────

class TestExplicitRange:
    def test_explicit_indices_take_precedence_over_preset(self):
        window = select_range(ANNUAL_WITH_TTM, start=1, end=3, preset='All')
        assert window.as_tuple() == (1, 3)

    def test_out_of_range_indices_are_clamped(self):
        result = CalculationResult()
        window = select_range(ANNUAL_WITH_TTM, start=-3, end=99, result=result)
        assert window.as_tuple() == (0, 5)
        assert [w.warning_type for w in result.warnings] == ['out_of_range_window'] * 2

    def test_reversed_pair_is_normalised(self):
        assert select_range(ANNUAL_WITH_TTM, start=4, end=1).as_tuple() == (1, 4)

    def test_only_start_runs_to_last_index(self):
        assert select_range(ANNUAL_WITH_TTM, start=3).as_tuple() == (3, 5)

    def test_only_end_starts_at_zero(self):
        assert select_range(ANNUAL_WITH_TTM, end=2).as_tuple() == (0, 2)


# ─── Percentage persistence ─────────────────────────────────────────────

def test_range_to_percentage():
    assert range_to_percentage(VisibleRange(start=1, end=5), 6) == (20.0, 100.0)
    assert range_to_percentage(VisibleRange(start=0, end=0), 1) == (0.0, 100.0)


def test_range_from_percentage_reapplies_to_new_length():
    assert range_from_percentage(20.0, 100.0, 11).as_tuple() == (2, 10)
    assert range_from_percentage(-10.0, 250.0, 5).as_tuple() == (0, 4)
    assert range_from_percentage(80.0, 20.0, 6).as_tuple() == (1, 4)
    assert range_from_percentage(0.0, 100.0, 0).as_tuple() == (0, 0)


def test_describe_range():
    assert describe_range(ANNUAL_WITH_TTM, VisibleRange(start=1, end=5)) == '2020 to TTM'
    assert describe_range([], VisibleRange()) == ''
