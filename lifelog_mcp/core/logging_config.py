"""
Logging Configuration Module.

This module provides centralized logging configuration for Lifelog MCP.

Features:
- Configurable log level with per-module overrides
- Simple, detailed and JSON line formats
- Console output on stderr only, since stdout carries the stdio MCP transport
"""

import logging
import sys
from typing import Optional

# Define log formats
SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

FORMATS = {
    "simple": SIMPLE_FORMAT,
    "detailed": DETAILED_FORMAT,
    "json": JSON_FORMAT,
}

# Module-specific log levels
MODULE_LOG_LEVELS = {
    "lifelog_mcp.lifelogs_api": "DEBUG",
    "lifelog_mcp.server": "DEBUG",
    "lifelog_mcp.client": "DEBUG",
    # Third-party libraries (reduce noise)
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "mcp": "WARNING",
    "asyncio": "WARNING",
}


def setup_logging(log_level: str = "INFO", log_format: Optional[str] = None) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Line format (simple, detailed, json); defaults to simple
    """
    level = log_level.upper()
    fmt = (log_format or "simple").lower()
    format_str = FORMATS.get(fmt, SIMPLE_FORMAT)

    formatter = logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture all levels, filter at handler level

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.debug(f"Logging configured: level={level}, format={fmt}")
