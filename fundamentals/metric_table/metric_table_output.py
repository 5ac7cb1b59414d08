"""
Metric Table Output Generator.
Reads entity statement payloads, runs the merger and statistics calculator,
and outputs the merged metric table.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from config.constants import STATEMENT_PAYLOAD_KEYS
from utils.logger import setup_logger
from utils.unified_schema import EntityStatements, MetricTable
from .calculator_base import CalculationResult
from .period_extractor import default_periods, validate_period_type
from .range_selector import select_range
from .statistics_calculator import StatisticsCalculator
from .table_merger import TableMerger

logger = setup_logger('metric_table_output')


def load_entities(path: str) -> List[EntityStatements]:
    """
    Load entity statements from a JSON payload.

    Expected shape:
        {"AAPL": {"income": [...], "balance_sheet": [...], "cash_flow": [...],
                  "ttm_income": {...}, ...}, ...}

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the payload is not an object of entity objects
    """
    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)

    if not isinstance(payload, dict):
        raise ValueError(f"Expected an object keyed by entity id in {path}")

    entities = []
    for entity_id, statements in payload.items():
        if not isinstance(statements, dict):
            raise ValueError(f"Entity {entity_id!r} must map to an object of statements")
        entities.append(EntityStatements.from_raw(
            entity_id,
            **{key: statements.get(key) for key in STATEMENT_PAYLOAD_KEYS}
        ))
    logger.info(f"Loaded {len(entities)} entities from {path}")
    return entities


class MetricTableBuilder:
    """
    Orchestrates period resolution, merging, windowing and statistics.
    """

    def __init__(self, period_type: str = 'annual'):
        """
        Initialize builder.

        Args:
            period_type: 'annual' or 'quarterly'
        """
        self.period_type = validate_period_type(period_type)
        self.merger = TableMerger(period_type)
        self.statistics = StatisticsCalculator()

    def build(
        self,
        entities: Sequence[EntityStatements],
        metric_ids: Sequence[str],
        start: Optional[int] = None,
        end: Optional[int] = None,
        preset: Optional[str] = None,
        reference_date: Optional[datetime] = None
    ) -> MetricTable:
        """
        Build the metric table for the selected entities and metrics.

        Statistics always cover each series' full non-TTM history,
        independent of the visible window.

        Args:
            entities: Entity statements
            metric_ids: Selected metric ids
            start: Explicit first visible index
            end: Explicit last visible index
            preset: Range preset name ("1Y", "5Y", "10Y", "All")
            reference_date: End of the placeholder timeline used when no
                period can be extracted (default: now)

        Returns:
            MetricTable with rows, stats and collected warnings
        """
        result = CalculationResult(value=None)

        periods, series_by_key = self.merger.build_series_table(entities, metric_ids, result)

        if not periods:
            periods = default_periods(self.period_type, reference_date)
            logger.info(f"No periods found, using placeholder {self.period_type} timeline ({len(periods)} periods)")
            series_by_key = {
                key: [(period, None) for period in periods] for key in series_by_key
            }

        visible_range = select_range(periods, self.period_type, start, end, preset, result)
        rows = self.merger.window_rows(periods, series_by_key, visible_range)

        stats = {}
        for key, series in series_by_key.items():
            stats_result = self.statistics.calculate_stats(series, key)
            result.extend(stats_result)
            stats[key] = stats_result.value

        logger.info(
            f"Built {self.period_type} table: {len(series_by_key)} series, "
            f"{len(rows)}/{len(periods)} periods visible, {len(result.warnings)} warnings"
        )

        return MetricTable(
            period_type=self.period_type,
            periods=periods,
            visible_range=visible_range,
            columns=list(series_by_key.keys()),
            rows=rows,
            stats=stats,
            warnings=[warning.to_dict() for warning in result.warnings],
        )

    def save(self, table: MetricTable, output_path: str) -> str:
        """
        Write the table as JSON with generation metadata.

        Returns:
            Path of the written file
        """
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)

        output_data: Dict[str, Any] = {
            "metadata": {
                "period_type": self.period_type,
                "generated_at": datetime.now().isoformat(),
            },
            "table": table.to_dict(),
        }
        with open(output, 'w', encoding='utf-8') as f:
            json.dump(output_data, f, indent=2, ensure_ascii=False)

        logger.info(f"Saved metric table to {output}")
        return str(output)
