from datetime import datetime

import pytest

from fundamentals.metric_table.calculator_base import CalculationResult
from fundamentals.metric_table.period_extractor import (
    default_periods,
    extract_periods,
    label_records,
    period_label,
)
from utils.unified_schema import RawStatementRecord


def record(**kwargs):
    return RawStatementRecord(**kwargs)


# ─── period_label ───────────────────────────────────────────────────────

class TestPeriodLabel:
    def test_annual_uses_date_year(self):
        assert period_label(record(date='2023-09-30'), 'annual') == '2023'

    def test_quarterly_uses_short_month_and_two_digit_year(self):
        assert period_label(record(date='2023-09-30'), 'quarterly') == 'Sep 23'
        assert period_label(record(date='2009-03-31'), 'quarterly') == 'Mar 09'

    def test_ttm_marker_wins_for_any_period_type(self):
        ttm_by_period = record(date='2024-06-30', period='TTM')
        ttm_by_date = record(date='TTM')
        for period_type in ('annual', 'quarterly'):
            assert period_label(ttm_by_period, period_type) == 'TTM'
            assert period_label(ttm_by_date, period_type) == 'TTM'

    def test_annual_falls_back_to_calendar_year(self):
        assert period_label(record(date=None, calendar_year='2020'), 'annual') == '2020'

    def test_annual_falls_back_to_numeric_period(self):
        assert period_label(record(date='garbage', period='2018'), 'annual') == '2018'

    def test_unparsable_record_is_dropped_with_warning(self):
        result = CalculationResult()
        assert period_label(record(date='not-a-date', period='FY'), 'annual', result) is None
        assert [w.warning_type for w in result.warnings] == ['malformed_period']

    def test_quarterly_has_no_calendar_year_fallback(self):
        result = CalculationResult()
        assert period_label(record(calendar_year='2020'), 'quarterly', result) is None
        assert result.warnings[0].warning_type == 'malformed_period'

    @pytest.mark.parametrize('period_type', ['annual', 'quarterly'])
    @pytest.mark.parametrize('date', ['9/30', 'Sep'])
    def test_date_without_year_is_dropped(self, date, period_type):
        result = CalculationResult()
        assert period_label(record(date=date), period_type, result) is None
        assert [w.warning_type for w in result.warnings] == ['malformed_period']

    def test_date_without_year_uses_calendar_year_for_annual(self):
        assert period_label(record(date='9/30', calendar_year='2021'), 'annual') == '2021'

    def test_invalid_period_type_raises(self):
        with pytest.raises(ValueError):
            period_label(record(date='2023-01-01'), 'monthly')


# ─── extract_periods ────────────────────────────────────────────────────

class TestExtractPeriods:
    def test_deduplicates_in_first_seen_order(self):
        records = [
            record(date='2022-09-30'),
            record(date='2021-09-30'),
            record(date='TTM'),
            record(date='2022-12-31'),
        ]
        assert extract_periods(records, 'annual') == ['2022', '2021', 'TTM']

    def test_malformed_records_are_skipped(self):
        result = CalculationResult()
        records = [record(date='2021-09-30'), record(date='??'), record(date='2022-09-30')]
        assert extract_periods(records, 'annual', result) == ['2021', '2022']
        assert len(result.warnings) == 1

    def test_empty_input(self):
        assert extract_periods([], 'quarterly') == []

    def test_label_records_keeps_every_valid_record(self):
        first = record(date='2022-03-31')
        second = record(date='2022-03-15')
        labelled = label_records([first, second], 'quarterly')
        assert labelled == [('Mar 22', first), ('Mar 22', second)]


# ─── default_periods ────────────────────────────────────────────────────

def test_default_annual_periods_cover_last_fourteen_years():
    periods = default_periods('annual', datetime(2024, 5, 1))
    assert len(periods) == 14
    assert periods[0] == '2011'
    assert periods[-1] == '2024'


def test_default_quarterly_periods_are_quarter_ends():
    periods = default_periods('quarterly', datetime(2024, 5, 1))
    assert len(periods) == 16
    assert periods[:4] == ['Mar 21', 'Jun 21', 'Sep 21', 'Dec 21']
    assert periods[-1] == 'Dec 24'
