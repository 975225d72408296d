"""
Root logger configuration for the collector process.
"""

import logging
import sys

from src.redfish_inventory.utils.logging_formatter import UTCTimestampFormatter


def setup_logging(config, root_logger: logging.Logger = None) -> None:
    """Install console and optional file handlers on the root logger."""
    log_level = getattr(logging, config.get_log_level(), logging.INFO)
    formatter = UTCTimestampFormatter(config.get_log_format())

    if root_logger is None:
        root_logger = logging.getLogger()

    # Clear any existing handlers to prevent double logging
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file = config.get_log_file()
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(log_level)
