"""
Logging utilities for the metric table engine.
Supports context-aware logging for runner scripts vs library use.
"""

import logging
from typing import Optional
from enum import Enum
from config.settings import settings


class LoggingContext(Enum):
    """Logging context modes for different execution scenarios."""
    STANDALONE = "standalone"          # Module run independently (full logging)
    ORCHESTRATED = "orchestrated"      # Called by a runner script (quiet sub-modules)
    SILENT = "silent"                  # Batch use (minimal output)
    PIPELINE_QUIET = "pipeline_quiet"  # User-facing output only


# Global logging mode (default: check env var, else standalone)
try:
    _CURRENT_MODE = LoggingContext(settings.LOG_MODE)
except ValueError:
    _CURRENT_MODE = LoggingContext.STANDALONE

# Console loggers that should always show INFO level (runner scripts)
CONSOLE_LOGGERS = {
    'run_metric_table',
}


def set_logging_mode(mode: LoggingContext):
    """
    Set the global logging mode.

    Args:
        mode: LoggingContext enum value
    """
    global _CURRENT_MODE
    _CURRENT_MODE = mode


def get_logging_mode() -> LoggingContext:
    """Get the current logging mode."""
    return _CURRENT_MODE


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Setup a logger with context-aware levels.

    Args:
        name: Logger name
        level: Logging level (default: INFO, may be overridden by mode)
        log_file: Optional file path for file logging (default: LOG_FILE from settings)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    effective_level = level
    current_mode = get_logging_mode()

    if current_mode == LoggingContext.ORCHESTRATED:
        if name not in CONSOLE_LOGGERS:
            effective_level = logging.ERROR
    elif current_mode == LoggingContext.SILENT:
        effective_level = logging.CRITICAL
    elif current_mode == LoggingContext.PIPELINE_QUIET:
        effective_level = logging.ERROR

    logger.setLevel(effective_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(effective_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    log_file = log_file or settings.LOG_FILE
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(effective_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Default logger for the application
default_logger = setup_logger('metric_table', level=logging.INFO)

for _message in settings.config_warnings:
    default_logger.warning(f"[config] {_message}")
