"""
Logging configuration for the lineage system.

Library modules log through ``logging.getLogger(__name__)``; applications
call ``setup_logging`` once to attach a handler.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None,
                  format_string: Optional[str] = None) -> None:
    """
    Configure logging for the ``dataflow_lineage`` package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            LINEAGE_LOG_LEVEL env var or WARNING.
        format_string: Custom log format string

    Example:
        >>> setup_logging(level="INFO")
        >>> logger = get_logger(__name__)
        >>> logger.info("Graph built")
    """
    log_level = level or os.getenv("LINEAGE_LOG_LEVEL", "WARNING")
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    package_logger = logging.getLogger("dataflow_lineage")
    package_logger.setLevel(numeric_level)

    # Replace any handler installed by a previous call
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(name)


__all__ = [
    "LOG_FORMAT",
    "setup_logging",
    "get_logger",
]
