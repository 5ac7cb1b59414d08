"""
Base calculator class with anomaly detection framework.

Every anomaly raised while building a metric table is recovered locally and
recorded as a MetricWarning; nothing is thrown to the caller.
"""

from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field, asdict
from datetime import datetime
from utils.logger import setup_logger

logger = setup_logger('calculator_base')


@dataclass
class MetricWarning:
    """Represents a warning/anomaly detected during calculation."""
    metric_name: str
    # 'malformed_period', 'unordered_period', 'out_of_range_window', 'invalid_preset',
    # 'data_missing', 'data_insufficient', 'negative_base', 'calculation_error'
    warning_type: str
    message: str
    severity: str  # 'info', 'warning', 'error'
    value: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CalculationResult:
    """Generic calculation result with warnings."""
    value: Any = None
    intermediate_values: Dict[str, Any] = field(default_factory=dict)
    warnings: List[MetricWarning] = field(default_factory=list)
    calculation_date: datetime = field(default_factory=datetime.now)

    def add_warning(
        self,
        metric_name: str,
        warning_type: str,
        message: str,
        severity: str = 'warning',
        value: Optional[float] = None
    ):
        """Add a warning to this result."""
        warning = MetricWarning(
            metric_name=metric_name,
            warning_type=warning_type,
            message=message,
            severity=severity,
            value=value
        )
        self.warnings.append(warning)
        if severity == 'info':
            logger.info(f"[{metric_name}] {message}")
        else:
            logger.warning(f"[{metric_name}] {message}")

    def extend(self, other: 'CalculationResult'):
        """Absorb warnings from a sub-calculation without logging them twice."""
        self.warnings.extend(other.warnings)


def record_warning(
    result: Optional[CalculationResult],
    metric_name: str,
    warning_type: str,
    message: str,
    severity: str = 'warning',
    value: Optional[float] = None
):
    """
    Record an anomaly on result, or only log it when no result is collecting.

    Lets pure helpers (extractor, sorter, range selector) be called on their
    own while still feeding the table builder's warning list.
    """
    if result is not None:
        result.add_warning(metric_name, warning_type, message, severity, value)
    else:
        logger.warning(f"[{metric_name}] {message}")


class CalculatorBase:
    """
    Base class for metric table calculators.
    Provides common utilities and anomaly detection framework.
    """

    def __init__(self, entity_id: Optional[str] = None):
        """
        Initialize calculator.

        Args:
            entity_id: Reporting entity the calculator works on (None = all entities)
        """
        self.entity_id = entity_id
        name = self.__class__.__name__
        self.logger = setup_logger(f'{name}_{entity_id}' if entity_id else name)

    def safe_divide(
        self,
        numerator: Optional[float],
        denominator: Optional[float],
        metric_name: str,
        result: CalculationResult
    ) -> Optional[float]:
        """
        Safely divide two numbers with error handling.

        Args:
            numerator: Numerator value
            denominator: Denominator value
            metric_name: Name of metric being calculated (for warnings)
            result: CalculationResult to add warnings to

        Returns:
            Division result or None if invalid
        """
        if numerator is None:
            result.add_warning(metric_name, 'data_missing', 'Numerator is None', 'error')
            return None

        if denominator is None:
            result.add_warning(metric_name, 'data_missing', 'Denominator is None', 'error')
            return None

        if denominator == 0:
            result.add_warning(
                metric_name,
                'calculation_error',
                f'Division by zero (denominator={denominator})',
                'error'
            )
            return None

        return numerator / denominator
