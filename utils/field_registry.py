"""
Centralized Field Registry - Single source of truth for which financial
statement a metric field is read from.

This registry defines:
1. The three statement origins (income statement, balance sheet, cash flow)
2. The fixed, mutually exclusive field id sets per origin
3. A precomputed lookup table used by the table merger

Field ids follow the provider's camelCase naming (e.g. 'revenue',
'totalAssets', 'freeCashFlow'). Any id not registered under the balance
sheet or cash flow defaults to the income statement.

统一字段注册表 - 指标字段所属财务报表的唯一真相来源。
"""

from typing import Dict, FrozenSet
from enum import Enum


class MetricOrigin(Enum):
    """Financial statement a metric field is read from."""
    INCOME = 'income'
    BALANCE_SHEET = 'balance_sheet'
    CASH_FLOW = 'cash_flow'


# =============================================================================
# INCOME STATEMENT FIELDS
# =============================================================================
# Also the default origin; listed explicitly for validation and display only.

INCOME_FIELDS: FrozenSet[str] = frozenset({
    'revenue', 'revenueGrowth', 'costOfRevenue', 'grossProfit', 'grossProfitRatio',
    'researchAndDevelopmentExpenses', 'generalAndAdministrativeExpenses',
    'sellingAndMarketingExpenses', 'marketingAndSalesExpenses',
    'sellingGeneralAndAdministrativeExpenses', 'otherExpenses', 'operatingExpenses',
    'costAndExpenses', 'operatingIncome', 'operatingIncomeRatio',
    'interestIncome', 'interestExpense', 'totalOtherIncomeExpensesNet',
    'depreciationAndAmortization', 'ebitda', 'ebitdaGrowth', 'ebitdaratio',
    'incomeBeforeTax', 'incomeBeforeTaxRatio', 'incomeTaxExpense',
    'netIncome', 'netIncomeGrowth', 'netIncomeRatio',
    'eps', 'epsGrowth', 'epsdiluted',
    'weightedAverageShsOut', 'weightedAverageShsOutDil', 'sharesChange',
})

# =============================================================================
# BALANCE SHEET FIELDS
# =============================================================================

BALANCE_FIELDS: FrozenSet[str] = frozenset({
    'cashAndCashEquivalents', 'cashGrowth', 'shortTermInvestments',
    'cashAndShortTermInvestments', 'netReceivables', 'inventory',
    'otherCurrentAssets', 'totalCurrentAssets', 'propertyPlantEquipmentNet',
    'goodwill', 'intangibleAssets', 'goodwillAndIntangibleAssets',
    'longTermInvestments', 'taxAssets', 'otherNonCurrentAssets',
    'totalNonCurrentAssets', 'otherAssets', 'totalAssets',
    'accountPayables', 'shortTermDebt', 'taxPayables', 'deferredRevenue',
    'otherCurrentLiabilities', 'totalCurrentLiabilities', 'longTermDebt',
    'deferredRevenueNonCurrent', 'deferredTaxLiabilitiesNonCurrent',
    'otherNonCurrentLiabilities', 'totalNonCurrentLiabilities', 'otherLiabilities',
    'capitalLeaseObligations', 'totalLiabilities', 'preferredStock', 'commonStock',
    'retainedEarnings', 'accumulatedOtherComprehensiveIncomeLoss',
    'othertotalStockholdersEquity', 'totalStockholdersEquity', 'totalEquity',
    'minorityInterest', 'totalLiabilitiesAndStockholdersEquity',
    'totalLiabilitiesAndTotalEquity', 'totalInvestments', 'totalDebt', 'netDebt',
})

# =============================================================================
# CASH FLOW FIELDS
# =============================================================================
# 'netIncome' and 'depreciationAndAmortization' also appear on provider cash
# flow statements; they are owned by the income statement here.

CASHFLOW_FIELDS: FrozenSet[str] = frozenset({
    'deferredIncomeTax', 'stockBasedCompensation', 'changeInWorkingCapital',
    'accountsReceivables', 'inventoryChange', 'accountsPayables',
    'otherWorkingCapital', 'otherNonCashItems',
    'netCashProvidedByOperatingActivities', 'investmentsInPropertyPlantAndEquipment',
    'acquisitionsNet', 'purchasesOfInvestments', 'salesMaturitiesOfInvestments',
    'otherInvestingActivites', 'netCashUsedForInvestingActivites',
    'debtRepayment', 'commonStockIssued', 'commonStockRepurchased',
    'dividendsPaid', 'otherFinancingActivites',
    'netCashUsedProvidedByFinancingActivities', 'effectOfForexChangesOnCash',
    'netChangeInCash', 'cashAtEndOfPeriod', 'cashAtBeginningOfPeriod',
    'operatingCashFlow', 'capitalExpenditure', 'freeCashFlow',
})

# =============================================================================
# PRECOMPUTED LOOKUP
# =============================================================================

METRIC_ORIGIN_LOOKUP: Dict[str, MetricOrigin] = {
    **{field_id: MetricOrigin.INCOME for field_id in INCOME_FIELDS},
    **{field_id: MetricOrigin.BALANCE_SHEET for field_id in BALANCE_FIELDS},
    **{field_id: MetricOrigin.CASH_FLOW for field_id in CASHFLOW_FIELDS},
}

FIELDS_BY_ORIGIN: Dict[MetricOrigin, FrozenSet[str]] = {
    MetricOrigin.INCOME: INCOME_FIELDS,
    MetricOrigin.BALANCE_SHEET: BALANCE_FIELDS,
    MetricOrigin.CASH_FLOW: CASHFLOW_FIELDS,
}


def resolve_metric_origin(metric_id: str) -> MetricOrigin:
    """
    Resolve which statement a metric id is read from.

    Args:
        metric_id: Provider field id (e.g. 'totalAssets')

    Returns:
        MetricOrigin; unknown ids default to MetricOrigin.INCOME
    """
    return METRIC_ORIGIN_LOOKUP.get(metric_id, MetricOrigin.INCOME)


def get_fields_for_origin(origin: MetricOrigin) -> FrozenSet[str]:
    """Get the registered field ids for a statement origin."""
    return FIELDS_BY_ORIGIN[origin]
