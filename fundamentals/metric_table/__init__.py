"""
Metric table package.

Merge multi-entity financial statements into one chronological table and
compute growth statistics per metric.
Basic Principle: Raw Records -> Periods -> Window -> Merged Rows -> Statistics

指标表包。
将多个实体的财务报表合并为按时间排序的表格，并计算各指标的增长统计。
基本原则：原始记录 -> 期间 -> 窗口 -> 合并行 -> 统计
"""

from .calculator_base import CalculatorBase, CalculationResult, MetricWarning
from .period_extractor import extract_periods, period_label, default_periods
from .period_sorter import sort_periods, compare_periods
from .range_selector import select_range, range_to_percentage, range_from_percentage, describe_range
from .statistics_calculator import StatisticsCalculator
from .table_merger import TableMerger
from .metric_table_output import MetricTableBuilder, load_entities

__all__ = [
    'CalculatorBase',
    'CalculationResult',
    'MetricWarning',
    'extract_periods',
    'period_label',
    'default_periods',
    'sort_periods',
    'compare_periods',
    'select_range',
    'range_to_percentage',
    'range_from_percentage',
    'describe_range',
    'StatisticsCalculator',
    'TableMerger',
    'MetricTableBuilder',
    'load_entities',
]
