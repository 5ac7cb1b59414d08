"""
Configuration settings loader.
Loads environment variables from .env file and exposes metric table overrides.
"""

import os
from pathlib import Path
from typing import List, Optional
from dotenv import load_dotenv
from .analysis_config import DEFAULT_VISIBLE_PERIODS, STATISTICS_THRESHOLDS

# Load environment variables from .env
project_root = Path(__file__).parent.parent
env_path = project_root / '.env'
load_dotenv(dotenv_path=env_path)


class Settings:
    """Application settings with environment overrides for the metric table engine."""

    def __init__(self):
        # Messages about rejected overrides; reported once the logger exists
        self.config_warnings: List[str] = []

        self.LOG_MODE: str = os.getenv('LOG_MODE', 'standalone').lower()
        self.LOG_FILE: Optional[str] = os.getenv('LOG_FILE') or None

        self.ANNUAL_WINDOW: int = self._read_positive_int(
            'METRIC_TABLE_ANNUAL_WINDOW', DEFAULT_VISIBLE_PERIODS['annual']
        )
        self.QUARTERLY_WINDOW: int = self._read_positive_int(
            'METRIC_TABLE_QUARTERLY_WINDOW', DEFAULT_VISIBLE_PERIODS['quarterly']
        )
        self.TTM_TOLERANCE: float = self._read_fraction(
            'METRIC_TABLE_TTM_TOLERANCE', STATISTICS_THRESHOLDS['TTM_MATCH_TOLERANCE']
        )

    def _read_positive_int(self, name: str, default: int) -> int:
        raw_value = os.getenv(name)
        if raw_value is None or raw_value.strip() == '':
            return default
        try:
            value = int(raw_value)
        except ValueError:
            self.config_warnings.append(f"{name}={raw_value!r} is not an integer, using {default}")
            return default
        if value < 1:
            self.config_warnings.append(f"{name}={value} must be >= 1, using {default}")
            return default
        return value

    def _read_fraction(self, name: str, default: float) -> float:
        raw_value = os.getenv(name)
        if raw_value is None or raw_value.strip() == '':
            return default
        try:
            value = float(raw_value)
        except ValueError:
            self.config_warnings.append(f"{name}={raw_value!r} is not a number, using {default}")
            return default
        if not 0 <= value < 1:
            self.config_warnings.append(f"{name}={value} must be in [0, 1), using {default}")
            return default
        return value

    def default_window(self, period_type: str) -> int:
        """
        Get the default visible window size for a period type.

        Args:
            period_type: 'annual' or 'quarterly'

        Returns:
            Number of most recent periods shown by default
        """
        if period_type == 'quarterly':
            return self.QUARTERLY_WINDOW
        return self.ANNUAL_WINDOW


# Global settings instance
settings = Settings()
