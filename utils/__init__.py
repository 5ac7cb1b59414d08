"""
Utilities module for the metric table engine.

=== 开发者必读 / DEVELOPER GUIDE ===

--- 常用工具速查 (Quick Reference) ---

1. 数值处理 (numeric_utils.py) ★ 最常用
   from utils.numeric_utils import clean_numeric, coerce_financial_value, safe_divide, percent_change
   - clean_numeric(value)            清洗数值(NaN/Inf/None → None)
   - coerce_financial_value(value)   解析带货币符号/千分位的字符串("$1,234" → 1234.0)
   - safe_divide(a, b)               安全除法(除零保护)
   - percent_change(cur, prev)       百分比变化(基数为0 → None)

2. 类型转换 (helpers.py)
   from utils.helpers import safe_int, parse_date, parse_year
   - parse_date(date_str)        日期解析(pandas)
   - parse_year(value)           四位年份解析("2023" → 2023)
   - format_large_number(value)  大数缩写(1.23B)

3. 日志 (logger.py)
   from utils.logger import setup_logger
   - logger = setup_logger('module_name')
   - LoggingContext / set_logging_mode(): 切换全局日志模式

--- 数据架构 ---

4. unified_schema.py    数据模型定义(RawStatementRecord, EntityStatements, MetricTable等)
5. field_registry.py    指标所属报表(利润表/资产负债表/现金流量表)
6. metric_registry.py   指标定义(显示名称、格式、增长指标的基础字段)

=== 注意事项 ===
- 做数值计算时,务必使用 clean_numeric() 或 safe_divide(),不要裸用 Python 除法
- 新增指标字段时,必须同步更新 field_registry.py 和 metric_registry.py
- 日志统一用 setup_logger(),不要用 print() 做调试输出
"""

from .logger import setup_logger, default_logger, LoggingContext, set_logging_mode, get_logging_mode
from .helpers import (
    safe_int,
    parse_year,
    format_large_number,
    parse_date,
)

__all__ = [
    'setup_logger',
    'default_logger',
    'LoggingContext',
    'set_logging_mode',
    'get_logging_mode',
    'safe_int',
    'parse_year',
    'format_large_number',
    'parse_date',
]
