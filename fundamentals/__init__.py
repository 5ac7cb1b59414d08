"""
Fundamentals module - Financial metric tables and growth statistics.
Consumes per-entity statement records to produce merged tables and stats.

基本面模块 - 财务指标表与增长统计。
消耗各实体的报表记录以生成合并表格与统计数据。
"""

from .metric_table import (
    MetricTableBuilder,
    TableMerger,
    StatisticsCalculator,
    load_entities,
)

__all__ = [
    'MetricTableBuilder',
    'TableMerger',
    'StatisticsCalculator',
    'load_entities',
]
