"""
Table Merger.

Merges per-entity statement records into one chronological table:
1. Union of periods across every entity and statement (TTM injected as a period)
2. For each period x entity x metric: resolve the metric's statement,
   find the entity's record for that period, coerce the value to float
3. Cells without data hold MISSING_VALUE (None)
4. Rows are filtered to the visible window over the sorted period list

Growth metrics not carried by the provider record (revenueGrowth,
cashGrowth, ...) are derived from their base field against the entity's
previous period. In annual tables the TTM growth uses the TTM rule from
StatisticsCalculator.calculate_ttm_growth.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from config.constants import TTM_LABEL, MISSING_VALUE
from utils.field_registry import METRIC_ORIGIN_LOOKUP, MetricOrigin, resolve_metric_origin
from utils.metric_registry import get_growth_base_fields
from utils.numeric_utils import coerce_financial_value
from utils.unified_schema import (
    AggregatedRow,
    EntityStatements,
    RawStatementRecord,
    VisibleRange,
    make_row_key,
)
from .calculator_base import CalculatorBase, CalculationResult
from .period_extractor import label_records, validate_period_type
from .period_sorter import sort_periods
from .range_selector import select_range
from .statistics_calculator import MetricPoint, StatisticsCalculator

# period label -> record, per statement origin
StatementIndex = Dict[MetricOrigin, Dict[str, RawStatementRecord]]


class TableMerger(CalculatorBase):
    """Merges multi-entity statement records into aggregated rows."""

    def __init__(self, period_type: str = 'annual'):
        super().__init__()
        self.period_type = validate_period_type(period_type)
        self.statistics = StatisticsCalculator()

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def index_entity(
        self,
        entity: EntityStatements,
        result: Optional[CalculationResult] = None
    ) -> StatementIndex:
        """
        Index an entity's records by statement and period label.

        The first record seen for a period wins. A separately supplied TTM
        record replaces a TTM-marked record from the statement list.
        """
        index: StatementIndex = {}
        for origin in MetricOrigin:
            by_period: Dict[str, RawStatementRecord] = {}
            for label, record in label_records(entity.records_for(origin), self.period_type, result):
                if label in by_period:
                    self.logger.debug(f"{entity.entity_id}: duplicate {origin.value} record for {label}, keeping first")
                    continue
                by_period[label] = record

            ttm_record = entity.ttm_record_for(origin)
            if ttm_record is not None:
                by_period[TTM_LABEL] = ttm_record
            index[origin] = by_period
        return index

    def collect_periods(
        self,
        indexes: Sequence[StatementIndex],
        result: Optional[CalculationResult] = None
    ) -> List[str]:
        """Sorted union of period labels across all entity indexes, TTM last."""
        labels = []
        seen = set()
        for index in indexes:
            for by_period in index.values():
                for label in by_period:
                    if label not in seen:
                        seen.add(label)
                        labels.append(label)
        return sort_periods(labels, result)

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    @staticmethod
    def _base_value(record: Optional[RawStatementRecord], base_fields: Tuple[str, ...]) -> Optional[float]:
        if record is None:
            return None
        for field_id in base_fields:
            value = coerce_financial_value(record.get(field_id))
            if value is not None:
                return value
        return None

    def _derive_growth(
        self,
        metric_id: str,
        period: str,
        by_period: Dict[str, RawStatementRecord],
        entity_periods: List[str],
        base_fields: Tuple[str, ...],
        result: Optional[CalculationResult]
    ) -> Optional[float]:
        """Growth of the base field vs. the entity's previous period."""
        current = self._base_value(by_period.get(period), base_fields)

        if period == TTM_LABEL:
            if self.period_type != 'annual' or len(entity_periods) < 2:
                return MISSING_VALUE
            ttm_growth = self.statistics.calculate_ttm_growth(
                current,
                self._base_value(by_period[entity_periods[-1]], base_fields),
                self._base_value(by_period[entity_periods[-2]], base_fields),
                metric_id
            )
            if result is not None:
                result.extend(ttm_growth)
            return ttm_growth.value

        position = entity_periods.index(period)
        if position == 0:
            return MISSING_VALUE
        previous = self._base_value(by_period[entity_periods[position - 1]], base_fields)
        return self.statistics.calculate_period_growth(current, previous, metric_id, result)

    def build_series(
        self,
        entity: EntityStatements,
        metric_id: str,
        periods: Sequence[str],
        index: Optional[StatementIndex] = None,
        result: Optional[CalculationResult] = None
    ) -> List[MetricPoint]:
        """
        Full (unwindowed) series of one entity's metric over the given periods.

        Args:
            entity: Entity statements
            metric_id: Metric id (provider field or derived growth metric)
            periods: Sorted timeline to align the series to
            index: Precomputed index_entity() output (built if omitted)
            result: Optional CalculationResult collecting warnings

        Returns:
            (period, value) points aligned to periods; missing cells hold None
        """
        if index is None:
            index = self.index_entity(entity, result)

        base_fields = get_growth_base_fields(metric_id)
        origin = resolve_metric_origin(metric_id)
        if base_fields and metric_id not in METRIC_ORIGIN_LOOKUP:
            # Unregistered growth ids live on their base field's statement
            origin = resolve_metric_origin(base_fields[0])
        by_period = index[origin]
        entity_periods = sort_periods([label for label in by_period if label != TTM_LABEL])

        series: List[MetricPoint] = []
        missing = 0
        for period in periods:
            record = by_period.get(period)
            value = coerce_financial_value(record.get(metric_id)) if record is not None else MISSING_VALUE
            if value is None and base_fields and record is not None:
                value = self._derive_growth(metric_id, period, by_period, entity_periods, base_fields, result)
            if value is None:
                missing += 1
            series.append((period, value))

        if missing and result is not None:
            result.add_warning(
                make_row_key(entity.entity_id, metric_id),
                'data_missing',
                f'No value for {missing} of {len(periods)} periods',
                'info'
            )
        return series

    def build_series_table(
        self,
        entities: Sequence[EntityStatements],
        metric_ids: Sequence[str],
        result: Optional[CalculationResult] = None
    ) -> Tuple[List[str], Dict[str, List[MetricPoint]]]:
        """
        Sorted timeline plus the full series for every (entity, metric).

        Returns:
            (periods, {row_key: series}) with row keys in entity-then-metric order
        """
        unique_entities = []
        seen_entities = set()
        for entity in entities:
            if entity.entity_id in seen_entities:
                self.logger.warning(f"Duplicate entity {entity.entity_id}, keeping first")
                continue
            seen_entities.add(entity.entity_id)
            unique_entities.append(entity)
        unique_metrics = list(dict.fromkeys(metric_ids))

        indexes = [self.index_entity(entity, result) for entity in unique_entities]
        periods = self.collect_periods(indexes, result)

        series_by_key: Dict[str, List[MetricPoint]] = {}
        for entity, index in zip(unique_entities, indexes):
            for metric_id in unique_metrics:
                series_by_key[make_row_key(entity.entity_id, metric_id)] = self.build_series(
                    entity, metric_id, periods, index, result
                )
        return periods, series_by_key

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    @staticmethod
    def window_rows(
        periods: Sequence[str],
        series_by_key: Dict[str, List[MetricPoint]],
        visible_range: VisibleRange
    ) -> List[AggregatedRow]:
        """Rows for periods[start..end] (inclusive)."""
        rows = []
        for position in range(visible_range.start, min(visible_range.end, len(periods) - 1) + 1):
            rows.append(AggregatedRow(
                period=periods[position],
                values={key: series[position][1] for key, series in series_by_key.items()},
            ))
        return rows

    def merge(
        self,
        entities: Sequence[EntityStatements],
        metric_ids: Sequence[str],
        visible_range: Optional[VisibleRange] = None,
        preset: Optional[str] = None,
        result: Optional[CalculationResult] = None
    ) -> List[AggregatedRow]:
        """
        Merge entities' records into rows for the visible window.

        Args:
            entities: Entity statements
            metric_ids: Selected metric ids
            visible_range: Explicit window (clamped); takes precedence over preset
            preset: Range preset name
            result: Optional CalculationResult collecting warnings

        Returns:
            One AggregatedRow per visible period, oldest first, TTM last if visible
        """
        periods, series_by_key = self.build_series_table(entities, metric_ids, result)
        if visible_range is not None:
            window = select_range(
                periods, self.period_type, visible_range.start, visible_range.end, result=result
            )
        else:
            window = select_range(periods, self.period_type, preset=preset, result=result)
        return self.window_rows(periods, series_by_key, window)
