"""
Flexible logging utility for the Redfish inventory collector.

Provides granular logging control with pipe-separated level configuration.
"""

import logging
from typing import Set

DEFAULT_LEVELS = "INFO|WARNING|ERROR|CRITICAL"


def parse_levels(level_config: str) -> Set[int]:
    """Parse pipe-separated level names into a set of logging constants."""
    enabled_levels = set()
    for level_name in (level_config or "").split("|"):
        level = logging.getLevelName(level_name.strip().upper())
        if isinstance(level, int):
            enabled_levels.add(level)
    if not enabled_levels:
        return {logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL}
    return enabled_levels


class FlexibleLogger:
    """
    Logger that only emits the levels named in its configuration.

    Examples:
    - "DEBUG" - Only debug messages
    - "INFO|ERROR" - Only info and error messages
    - "INFO|WARNING|ERROR|CRITICAL" - Standard operational logging
    """

    def __init__(self, name: str, levels: str = DEFAULT_LEVELS):
        self.logger = logging.getLogger(name)
        self.name = name
        self.enabled_levels = parse_levels(levels)

    def _should_log(self, level: int) -> bool:
        return level in self.enabled_levels

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message if enabled."""
        if self._should_log(logging.DEBUG):
            self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        """Log info message if enabled."""
        if self._should_log(logging.INFO):
            self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message if enabled."""
        if self._should_log(logging.WARNING):
            self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        """Log error message if enabled."""
        if self._should_log(logging.ERROR):
            self.logger.error(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs):
        """Log critical message if enabled."""
        if self._should_log(logging.CRITICAL):
            self.logger.critical(msg, *args, **kwargs)


def get_logger(name: str, levels: str = DEFAULT_LEVELS) -> FlexibleLogger:
    """Get a flexible logger instance with granular level control."""
    return FlexibleLogger(name, levels)
