"""
Metric Registry - Single source of truth for selectable metrics.

This registry defines the display names and formatting rules for every
metric that can be placed in the metric table, grouped by statement, and
the base fields used to derive period-over-period growth metrics.
"""

import re
from typing import Dict, NamedTuple, Optional, Tuple
from enum import Enum


class MetricFormat(Enum):
    CURRENCY = 'currency'
    PERCENT = 'percent'
    RATIO = 'ratio'
    NUMBER = 'number'


class MetricDefinition(NamedTuple):
    unified_key: str
    en_name: str
    format: MetricFormat
    description: str = ""


def _metric(key: str, name: str, fmt: MetricFormat = MetricFormat.CURRENCY, description: str = "") -> Tuple[str, MetricDefinition]:
    return key, MetricDefinition(key, name, fmt, description)


# =============================================================================
# INCOME STATEMENT METRICS
# =============================================================================
INCOME_STATEMENT_METRICS: Dict[str, MetricDefinition] = dict([
    _metric('revenue', 'Revenue'),
    _metric('revenueGrowth', 'Revenue Growth', MetricFormat.PERCENT, 'Change vs previous period'),
    _metric('costOfRevenue', 'Cost of Revenue'),
    _metric('grossProfit', 'Gross Profit'),
    _metric('grossProfitRatio', 'Gross Profit Margin', MetricFormat.PERCENT),
    _metric('researchAndDevelopmentExpenses', 'R&D Expenses'),
    _metric('generalAndAdministrativeExpenses', 'G&A Expenses'),
    _metric('marketingAndSalesExpenses', 'Marketing Expenses'),
    _metric('sellingGeneralAndAdministrativeExpenses', 'SG&A Expenses'),
    _metric('operatingExpenses', 'Operating Expenses'),
    _metric('operatingIncome', 'Operating Income'),
    _metric('operatingIncomeRatio', 'Operating Margin', MetricFormat.PERCENT),
    _metric('interestExpense', 'Interest Expense'),
    _metric('depreciationAndAmortization', 'Depreciation & Amortization'),
    _metric('ebitda', 'EBITDA'),
    _metric('ebitdaGrowth', 'EBITDA Growth', MetricFormat.PERCENT, 'Change vs previous period'),
    _metric('ebitdaratio', 'EBITDA Margin', MetricFormat.PERCENT),
    _metric('incomeBeforeTax', 'Income Before Tax'),
    _metric('incomeBeforeTaxRatio', 'Pre-Tax Margin', MetricFormat.PERCENT),
    _metric('incomeTaxExpense', 'Income Tax Expense'),
    _metric('netIncome', 'Net Income'),
    _metric('netIncomeGrowth', 'Net Income Growth', MetricFormat.PERCENT, 'Change vs previous period'),
    _metric('netIncomeRatio', 'Net Income Margin', MetricFormat.PERCENT),
    _metric('eps', 'EPS'),
    _metric('epsGrowth', 'EPS Growth', MetricFormat.PERCENT, 'Change vs previous period'),
    _metric('epsdiluted', 'Diluted EPS'),
    _metric('weightedAverageShsOut', 'Shares Outstanding', MetricFormat.NUMBER),
    _metric('weightedAverageShsOutDil', 'Diluted Shares Outstanding', MetricFormat.NUMBER),
    _metric('sharesChange', 'Shares Change', MetricFormat.PERCENT),
])

# =============================================================================
# BALANCE SHEET METRICS
# =============================================================================
BALANCE_SHEET_METRICS: Dict[str, MetricDefinition] = dict([
    _metric('cashAndCashEquivalents', 'Cash & Cash Equivalents'),
    _metric('cashGrowth', 'Cash Growth', MetricFormat.PERCENT, 'Change in cash & short term investments'),
    _metric('shortTermInvestments', 'Short Term Investments'),
    _metric('cashAndShortTermInvestments', 'Cash & Short Term Investments'),
    _metric('netReceivables', 'Net Receivables'),
    _metric('inventory', 'Inventory'),
    _metric('otherCurrentAssets', 'Other Current Assets'),
    _metric('totalCurrentAssets', 'Total Current Assets'),
    _metric('propertyPlantEquipmentNet', 'PP&E (Net)'),
    _metric('goodwill', 'Goodwill'),
    _metric('intangibleAssets', 'Intangible Assets'),
    _metric('goodwillAndIntangibleAssets', 'Goodwill & Intangibles'),
    _metric('longTermInvestments', 'Long Term Investments'),
    _metric('totalAssets', 'Total Assets'),
    _metric('accountPayables', 'Account Payables'),
    _metric('shortTermDebt', 'Short Term Debt'),
    _metric('totalCurrentLiabilities', 'Total Current Liabilities'),
    _metric('longTermDebt', 'Long Term Debt'),
    _metric('totalLiabilities', 'Total Liabilities'),
    _metric('totalStockholdersEquity', 'Total Stockholders Equity'),
    _metric('totalEquity', 'Total Equity'),
    _metric('totalLiabilitiesAndStockholdersEquity', 'Total Liabilities & Equity'),
    _metric('totalDebt', 'Total Debt'),
    _metric('netDebt', 'Net Debt'),
])

# =============================================================================
# CASH FLOW METRICS
# =============================================================================
CASH_FLOW_METRICS: Dict[str, MetricDefinition] = dict([
    _metric('stockBasedCompensation', 'Stock Based Compensation'),
    _metric('changeInWorkingCapital', 'Change in Working Capital'),
    _metric('netCashProvidedByOperatingActivities', 'Net Cash from Operations'),
    _metric('investmentsInPropertyPlantAndEquipment', 'Investments in PP&E'),
    _metric('acquisitionsNet', 'Acquisitions (Net)'),
    _metric('netCashUsedForInvestingActivites', 'Net Cash from Investing'),
    _metric('debtRepayment', 'Debt Repayment'),
    _metric('commonStockRepurchased', 'Common Stock Repurchased'),
    _metric('dividendsPaid', 'Dividends Paid'),
    _metric('netCashUsedProvidedByFinancingActivities', 'Net Cash from Financing'),
    _metric('netChangeInCash', 'Net Change in Cash'),
    _metric('cashAtEndOfPeriod', 'Cash at End of Period'),
    _metric('operatingCashFlow', 'Operating Cash Flow'),
    _metric('capitalExpenditure', 'Capital Expenditure'),
    _metric('freeCashFlow', 'Free Cash Flow'),
])

# =============================================================================
# DERIVED GROWTH METRICS
# =============================================================================
# Growth metric -> base fields, first available wins
GROWTH_BASE_FIELDS: Dict[str, Tuple[str, ...]] = {
    'revenueGrowth': ('revenue',),
    'ebitdaGrowth': ('ebitda',),
    'netIncomeGrowth': ('netIncome',),
    'epsGrowth': ('eps',),
    'cashGrowth': ('cashAndShortTermInvestments', 'cashAndCashEquivalents'),
}

# camelCase words rendered as acronyms in generated display names
_ACRONYMS = [
    ('Ebitda', 'EBITDA'),
    ('Ebit', 'EBIT'),
    ('Eps', 'EPS'),
    ('Roa', 'ROA'),
    ('Roe', 'ROE'),
    ('Fcf', 'FCF'),
    ('R And D', 'R&D'),
    ('Sg And A', 'SG&A'),
    ('Pp And E', 'PP&E'),
]


def get_metric_definition(key: str) -> Optional[MetricDefinition]:
    """Find definition for any metric key."""
    if key in INCOME_STATEMENT_METRICS: return INCOME_STATEMENT_METRICS[key]
    if key in BALANCE_SHEET_METRICS: return BALANCE_SHEET_METRICS[key]
    if key in CASH_FLOW_METRICS: return CASH_FLOW_METRICS[key]
    return None


def format_metric_id(metric_id: str) -> str:
    """
    Generate a display name from a camelCase metric id.

    Examples:
        >>> format_metric_id('netDebtToEbitda')
        'Net Debt To EBITDA'
    """
    words = re.sub(r'([A-Z])', r' \1', metric_id).strip().split()
    label = ' '.join(word[:1].upper() + word[1:] for word in words)
    for raw, acronym in _ACRONYMS:
        label = re.sub(rf'\b{raw}\b', acronym, label)
    return label


def get_metric_display_name(metric_id: str) -> str:
    """Registered display name, or one generated from the id."""
    definition = get_metric_definition(metric_id)
    if definition:
        return definition.en_name
    return format_metric_id(metric_id)


def get_metric_format(metric_id: str) -> MetricFormat:
    """Registered format; unknown metrics are treated as currency amounts."""
    definition = get_metric_definition(metric_id)
    return definition.format if definition else MetricFormat.CURRENCY


def get_growth_base_fields(metric_id: str) -> Optional[Tuple[str, ...]]:
    """
    Base fields for a derived growth metric.

    Registered growth metrics use GROWTH_BASE_FIELDS. Any other percent
    metric whose id ends in 'Growth' derives from the id without the suffix
    (e.g. 'grossProfitGrowth' -> 'grossProfit').

    Returns:
        Tuple of base field ids, or None if metric_id is not a growth metric
    """
    if metric_id in GROWTH_BASE_FIELDS:
        return GROWTH_BASE_FIELDS[metric_id]
    if metric_id.endswith('Growth') and len(metric_id) > len('Growth'):
        if get_metric_format(metric_id) == MetricFormat.PERCENT or get_metric_definition(metric_id) is None:
            return (metric_id[:-len('Growth')],)
    return None
