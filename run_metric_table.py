"""
Metric Table CLI
================

Builds a merged multi-entity metric table from a JSON payload of statements.

Usage:
    python run_metric_table.py <INPUT_JSON> --metrics revenue netIncome [options]

Example:
    python run_metric_table.py data/statements.json --metrics revenue freeCashFlow --preset 5Y
    python run_metric_table.py data/statements.json --metrics revenue --period-type quarterly --start 2 --end 9
    python run_metric_table.py data/statements.json --metrics revenueGrowth --output generated_reports/table.json

Input format:
    {"AAPL": {"income": [...], "balance_sheet": [...], "cash_flow": [...], "ttm_income": {...}}, ...}
"""

import sys
import os
import argparse

# Setup project root path to import internal modules
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

import pandas as pd

from config.analysis_config import RANGE_PRESETS
from config.constants import PERIOD_TYPES, ROW_KEY_SEPARATOR
from fundamentals.metric_table import MetricTableBuilder, load_entities, describe_range
from utils.logger import setup_logger
from utils.helpers import format_large_number
from utils.metric_registry import MetricFormat, get_metric_display_name, get_metric_format
from utils.numeric_utils import clean_numeric, safe_format

logger = setup_logger('run_metric_table')


def format_cell(value, metric_format):
    """Console formatting for one table cell."""
    value = clean_numeric(value)
    if value is None:
        return "N/A"
    if metric_format == MetricFormat.PERCENT:
        return safe_format(value, ".2f", suffix="%")
    if metric_format == MetricFormat.RATIO:
        return safe_format(value, ".2f")
    return format_large_number(value)


def column_formats(columns, metric_ids):
    """Map each "{entity}_{metric}" column to its metric display format."""
    formats = {}
    for column in columns:
        for metric_id in metric_ids:
            if column.endswith(ROW_KEY_SEPARATOR + metric_id):
                formats[column] = get_metric_format(metric_id)
                break
    return formats


def print_table(table, metric_ids):
    """Print rows, stats and warnings to the console."""
    print("\n" + "=" * 80)
    print(f"  METRIC TABLE ({table.period_type.upper()}) - "
          f"{describe_range(table.periods, table.visible_range)}")
    print("=" * 80)

    print(f"\nMetrics: {', '.join(get_metric_display_name(m) for m in metric_ids)}")
    print(f"Periods: {len(table.rows)} visible of {len(table.periods)}\n")

    with pd.option_context('display.max_columns', None, 'display.width', 200):
        formats = column_formats(table.columns, metric_ids)
        df = table.to_dataframe()
        for column in df.columns:
            metric_format = formats.get(column, MetricFormat.NUMBER)
            df[column] = [format_cell(value, metric_format) for value in df[column]]
        print(df.to_string())

    print("\nGrowth statistics (full history, TTM excluded):")
    print("-" * 60)
    for key, stat in table.stats.items():
        total = safe_format(stat.total_change_percent, ".2f", suffix="%")
        cagr = safe_format(stat.cagr_percent, ".2f", suffix="%")
        print(f"  {key:<40} Total: {total:>10}   CAGR: {cagr:>10}")

    if table.warnings:
        print(f"\n[WARN] {len(table.warnings)} anomalies recorded")
        for warning in table.warnings:
            if warning['severity'] != 'info':
                print(f"  [!] {warning['metric_name']}: {warning['message']}")


def main():
    parser = argparse.ArgumentParser(description="Build a merged metric table from statement records.")
    parser.add_argument("input", type=str, help="JSON file of entity statements")
    parser.add_argument("--metrics", nargs="+", required=True, help="Metric ids (e.g. revenue netIncome)")
    parser.add_argument("--period-type", choices=PERIOD_TYPES, default="annual", help="Period granularity")
    parser.add_argument("--preset", choices=list(RANGE_PRESETS), default=None, help="Visible range preset")
    parser.add_argument("--start", type=int, default=None, help="First visible period index")
    parser.add_argument("--end", type=int, default=None, help="Last visible period index")
    parser.add_argument("--output", type=str, default=None, help="Optional JSON output path")

    args = parser.parse_args()

    try:
        entities = load_entities(args.input)
    except FileNotFoundError:
        print(f"[ERROR] Input file not found: {args.input}")
        sys.exit(1)
    except ValueError as e:
        print(f"[ERROR] Invalid input: {e}")
        sys.exit(1)

    if not entities:
        print("[ERROR] No entities in input file.")
        sys.exit(1)

    try:
        builder = MetricTableBuilder(period_type=args.period_type)
        table = builder.build(
            entities,
            args.metrics,
            start=args.start,
            end=args.end,
            preset=args.preset,
        )
    except Exception:
        logger.exception("Failed to build metric table")
        print("[ERROR] Failed to build metric table")
        sys.exit(1)

    print_table(table, args.metrics)

    if args.output:
        path = builder.save(table, args.output)
        print(f"\n[OK] Saved to {path}")


if __name__ == "__main__":
    main()
