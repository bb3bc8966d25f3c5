"""
Logging configuration for the MCP server.

Logs go to stderr: stdout carries the stdio transport.
"""

import logging
import os
import sys


def setup_logging(level: str = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name; defaults to LOG_LEVEL or INFO

    Returns:
        The package logger
    """
    level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    logger = logging.getLogger("inventory_replenishment")
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    ))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
