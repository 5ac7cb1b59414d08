import logging

import pytest
from pydantic import ValidationError

from config.settings import Settings
from utils.field_registry import MetricOrigin
from utils.helpers import parse_date, parse_year, safe_int
from utils.logger import LoggingContext, get_logging_mode, set_logging_mode, setup_logger
from utils.numeric_utils import clean_numeric, coerce_financial_value, percent_change, safe_format
from utils.unified_schema import AggregatedRow, EntityStatements, MetricTable, RawStatementRecord


# ─── Numeric coercion ───────────────────────────────────────────────────

class TestNumeric:
    def test_formatted_strings(self):
        assert coerce_financial_value('$1,234.50') == 1234.5
        assert coerce_financial_value(' -12 ') == -12.0
        assert coerce_financial_value('1 000') == 1000.0

    def test_unusable_values(self):
        assert coerce_financial_value('N/A') is None
        assert coerce_financial_value('') is None
        assert coerce_financial_value(None) is None
        assert coerce_financial_value(float('nan')) is None
        assert coerce_financial_value(True) is None

    def test_numbers_pass_through(self):
        assert coerce_financial_value(5) == 5.0
        assert clean_numeric('42.5') == 42.5

    def test_percent_change(self):
        assert percent_change(150, 100) == pytest.approx(50.0)
        assert percent_change(1, 0) is None

    def test_safe_format(self):
        assert safe_format(12.345, '.1f', suffix='%') == '12.3%'
        assert safe_format(None) == 'N/A'


# ─── Dates and years ────────────────────────────────────────────────────

def test_parse_date():
    assert parse_date('2023-09-30').month == 9
    assert parse_date('TTM') is None
    assert parse_date(None) is None


def test_parse_year_and_safe_int():
    assert parse_year('2023') == 2023
    assert parse_year(2023) == 2023
    assert parse_year('FY') is None
    assert parse_year('23') is None
    assert safe_int('2021', default=None) == 2021
    assert safe_int('Mar 23', default=None) is None


# ─── Schema ─────────────────────────────────────────────────────────────

class TestSchema:
    def test_from_raw_splits_identity_and_metrics(self):
        record = RawStatementRecord.from_raw({
            'date': '2023-09-30', 'symbol': 'AAPL', 'reportedCurrency': 'USD',
            'calendarYear': 2023, 'period': 'FY', 'revenue': 383285000000,
        })
        assert record.calendar_year == '2023'
        assert record.metric_values == {'revenue': 383285000000}
        assert not record.is_ttm

    def test_records_are_immutable(self):
        record = RawStatementRecord(date='2023-01-01')
        with pytest.raises(ValidationError):
            record.date = '2024-01-01'

    def test_separate_ttm_record_takes_precedence(self):
        entity = EntityStatements.from_raw(
            'AAA',
            income=[{'date': 'TTM', 'revenue': 1}],
            ttm_income={'date': '2024-06-30', 'revenue': 2},
        )
        assert entity.ttm_record_for(MetricOrigin.INCOME).get('revenue') == 2
        assert entity.ttm_record_for(MetricOrigin.CASH_FLOW) is None

    def test_dataframe_keeps_columns_for_empty_tables(self):
        table = MetricTable(period_type='annual', columns=['AAA_revenue'])
        df = table.to_dataframe()
        assert list(df.columns) == ['AAA_revenue']
        assert df.empty

    def test_dataframe_rows(self):
        table = MetricTable(
            period_type='annual',
            columns=['AAA_revenue', 'BBB_revenue'],
            rows=[AggregatedRow(period='2023', values={'AAA_revenue': 1.0, 'BBB_revenue': None})],
        )
        df = table.to_dataframe()
        assert df.loc['2023', 'AAA_revenue'] == 1.0


# ─── Settings and logging ───────────────────────────────────────────────

class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv('METRIC_TABLE_ANNUAL_WINDOW', raising=False)
        monkeypatch.delenv('METRIC_TABLE_QUARTERLY_WINDOW', raising=False)
        monkeypatch.delenv('METRIC_TABLE_TTM_TOLERANCE', raising=False)
        settings = Settings()
        assert settings.default_window('annual') == 5
        assert settings.default_window('quarterly') == 8
        assert settings.config_warnings == []

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv('METRIC_TABLE_ANNUAL_WINDOW', '7')
        monkeypatch.setenv('METRIC_TABLE_TTM_TOLERANCE', '0.01')
        settings = Settings()
        assert settings.ANNUAL_WINDOW == 7
        assert settings.TTM_TOLERANCE == 0.01

    def test_invalid_override_falls_back(self, monkeypatch):
        monkeypatch.setenv('METRIC_TABLE_ANNUAL_WINDOW', 'abc')
        monkeypatch.setenv('METRIC_TABLE_QUARTERLY_WINDOW', '0')
        monkeypatch.setenv('METRIC_TABLE_TTM_TOLERANCE', '2')
        settings = Settings()
        assert settings.ANNUAL_WINDOW == 5
        assert settings.QUARTERLY_WINDOW == 8
        assert settings.TTM_TOLERANCE == 0.001
        assert len(settings.config_warnings) == 3


def test_logging_modes():
    previous = get_logging_mode()
    try:
        set_logging_mode(LoggingContext.SILENT)
        assert setup_logger('test_silent').level == logging.CRITICAL

        set_logging_mode(LoggingContext.ORCHESTRATED)
        assert setup_logger('test_sub_module').level == logging.ERROR
        assert setup_logger('run_metric_table').level == logging.INFO
    finally:
        set_logging_mode(previous)
