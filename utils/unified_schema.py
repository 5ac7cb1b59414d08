"""
Unified Data Schema - Data models for the metric table engine
==============================================================

This module defines the pydantic models that flow through the engine:

    RawStatementRecord -> EntityStatements -> MetricTable
                                                ├── VisibleRange
                                                ├── AggregatedRow
                                                └── DerivedStats

Period Label Convention
-----------------------
- Annual periods: four-digit calendar year, e.g. "2023"
- Quarterly periods: short month + two-digit year, e.g. "Sep 23"
- Trailing twelve months: the literal "TTM", always ordered last

Value Conventions
-----------------
- Monetary values are raw provider units (NOT rescaled to millions)
- Growth and statistics are percentages (50.0 = +50%)
- A missing value is None, never 0

Row Keys
--------
Merged values are keyed "{entity_id}_{metric_id}", e.g. "AAPL_revenue".

All models are rebuilt from fresh inputs on every call; nothing is persisted.
"""

from typing import Optional, Dict, Any, List, Tuple
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from config.constants import (
    TTM_LABEL,
    RECORD_IDENTITY_KEYS,
    PROVIDER_METADATA_KEYS,
    ROW_KEY_SEPARATOR,
)
from utils.field_registry import MetricOrigin


def make_row_key(entity_id: str, metric_id: str) -> str:
    """Build the merged-table key for an (entity, metric) pair."""
    return f"{entity_id}{ROW_KEY_SEPARATOR}{metric_id}"


class RawStatementRecord(BaseModel):
    """
    One provider record for a single period of one financial statement.
    Immutable once built.
    """
    model_config = ConfigDict(frozen=True)

    date: Optional[str] = Field(None, description="Fiscal period end date (e.g. '2023-09-30') or 'TTM'")
    period: Optional[str] = Field(None, description="Provider period marker (e.g. 'FY', 'Q3', 'TTM')")
    calendar_year: Optional[str] = Field(None, description="Explicit calendar year (e.g. '2023')")
    metric_values: Dict[str, Any] = Field(default_factory=dict, description="Metric id -> number or formatted string")

    @property
    def is_ttm(self) -> bool:
        """True if the record carries the trailing-twelve-months marker."""
        return self.period == TTM_LABEL or self.date == TTM_LABEL

    def get(self, metric_id: str) -> Any:
        """Raw value for a metric id, or None if the record does not carry it."""
        return self.metric_values.get(metric_id)

    @classmethod
    def from_raw(cls, data: Dict[str, Any]) -> 'RawStatementRecord':
        """
        Build a record from a provider dict.

        The keys 'date', 'period' and 'calendarYear' identify the period;
        provider bookkeeping keys are dropped; every other key is a metric field.
        """
        metric_values = {
            key: value for key, value in data.items()
            if key not in RECORD_IDENTITY_KEYS and key not in PROVIDER_METADATA_KEYS
        }
        calendar_year = data.get('calendarYear')
        return cls(
            date=str(data['date']) if data.get('date') is not None else None,
            period=str(data['period']) if data.get('period') is not None else None,
            calendar_year=str(calendar_year) if calendar_year is not None else None,
            metric_values=metric_values,
        )


class EntityStatements(BaseModel):
    """
    All statement records for one reporting entity.

    TTM records may arrive either inside the statement lists (period == 'TTM')
    or separately through the ttm_* fields.
    """
    entity_id: str = Field(..., description="Reporting entity identifier (e.g. ticker)")
    income: List[RawStatementRecord] = Field(default_factory=list)
    balance_sheet: List[RawStatementRecord] = Field(default_factory=list)
    cash_flow: List[RawStatementRecord] = Field(default_factory=list)
    ttm_income: Optional[RawStatementRecord] = None
    ttm_balance_sheet: Optional[RawStatementRecord] = None
    ttm_cash_flow: Optional[RawStatementRecord] = None

    def records_for(self, origin: MetricOrigin) -> List[RawStatementRecord]:
        """Statement records holding metrics of the given origin."""
        if origin == MetricOrigin.BALANCE_SHEET:
            return self.balance_sheet
        if origin == MetricOrigin.CASH_FLOW:
            return self.cash_flow
        return self.income

    def ttm_record_for(self, origin: MetricOrigin) -> Optional[RawStatementRecord]:
        """
        TTM record for a statement type.

        A separately supplied ttm_* record takes precedence over a
        TTM-marked record inside the statement list.
        """
        separate = {
            MetricOrigin.INCOME: self.ttm_income,
            MetricOrigin.BALANCE_SHEET: self.ttm_balance_sheet,
            MetricOrigin.CASH_FLOW: self.ttm_cash_flow,
        }[origin]
        if separate is not None:
            return separate
        for record in self.records_for(origin):
            if record.is_ttm:
                return record
        return None

    def all_records(self) -> List[RawStatementRecord]:
        """Every record across the three statements plus TTM records."""
        records = list(self.income) + list(self.balance_sheet) + list(self.cash_flow)
        for ttm_record in (self.ttm_income, self.ttm_balance_sheet, self.ttm_cash_flow):
            if ttm_record is not None:
                records.append(ttm_record)
        return records

    @classmethod
    def from_raw(
        cls,
        entity_id: str,
        income: Optional[List[Dict[str, Any]]] = None,
        balance_sheet: Optional[List[Dict[str, Any]]] = None,
        cash_flow: Optional[List[Dict[str, Any]]] = None,
        ttm_income: Optional[Dict[str, Any]] = None,
        ttm_balance_sheet: Optional[Dict[str, Any]] = None,
        ttm_cash_flow: Optional[Dict[str, Any]] = None,
    ) -> 'EntityStatements':
        """Build entity statements from provider dicts."""
        def _records(items):
            return [RawStatementRecord.from_raw(item) for item in (items or [])]

        def _ttm(item):
            if not item:
                return None
            # A separately sourced TTM payload is TTM by definition
            return RawStatementRecord.from_raw({**item, 'period': TTM_LABEL})

        return cls(
            entity_id=entity_id,
            income=_records(income),
            balance_sheet=_records(balance_sheet),
            cash_flow=_records(cash_flow),
            ttm_income=_ttm(ttm_income),
            ttm_balance_sheet=_ttm(ttm_balance_sheet),
            ttm_cash_flow=_ttm(ttm_cash_flow),
        )


class VisibleRange(BaseModel):
    """Inclusive index window over the sorted period list."""
    model_config = ConfigDict(frozen=True)

    start: int = Field(0, ge=0, description="First visible index")
    end: int = Field(0, ge=0, description="Last visible index (inclusive)")

    def as_tuple(self) -> Tuple[int, int]:
        return self.start, self.end


class AggregatedRow(BaseModel):
    """One visible period with merged values for every (entity, metric)."""
    period: str
    values: Dict[str, Optional[float]] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Flat dict: {'period': ..., 'AAPL_revenue': ..., ...}"""
        return {'period': self.period, **self.values}


class DerivedStats(BaseModel):
    """Growth statistics over a metric's full non-TTM series."""
    total_change_percent: Optional[float] = Field(None, description="(last - first) / |first| * 100")
    cagr_percent: Optional[float] = Field(None, description="Compound annual growth rate in percent")


class MetricTable(BaseModel):
    """Merged multi-entity metric table with statistics and anomalies."""
    period_type: str
    periods: List[str] = Field(default_factory=list, description="All periods, sorted, TTM last")
    visible_range: VisibleRange = Field(default_factory=VisibleRange)
    columns: List[str] = Field(default_factory=list, description="Row keys in entity/metric selection order")
    rows: List[AggregatedRow] = Field(default_factory=list)
    stats: Dict[str, DerivedStats] = Field(default_factory=dict)
    warnings: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def visible_periods(self) -> List[str]:
        return [row.period for row in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        """Rows as a DataFrame indexed by period, one column per row key."""
        df = pd.DataFrame(
            [row.to_dict() for row in self.rows],
            columns=['period'] + self.columns,
        )
        return df.set_index('period')

    def stats_dataframe(self) -> pd.DataFrame:
        """Stats as a DataFrame indexed by row key."""
        df = pd.DataFrame(
            [{'key': key, **stat.model_dump()} for key, stat in self.stats.items()],
            columns=['key', 'total_change_percent', 'cagr_percent'],
        )
        return df.set_index('key')

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            'period_type': self.period_type,
            'periods': list(self.periods),
            'visible_range': {'start': self.visible_range.start, 'end': self.visible_range.end},
            'rows': [row.to_dict() for row in self.rows],
            'stats': {key: stat.model_dump() for key, stat in self.stats.items()},
            'warnings': list(self.warnings),
        }
