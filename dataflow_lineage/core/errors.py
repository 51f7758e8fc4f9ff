"""
Errors Module
=============

Exceptions raised by the lineage system.
"""


class LineageError(Exception):
    """Base class for lineage errors"""


class DataflowParseError(LineageError):
    """Raised when a raw dataflow record cannot be interpreted"""


class ConfigError(LineageError):
    """Raised when a configuration file is invalid"""


__all__ = [
    "LineageError",
    "DataflowParseError",
    "ConfigError",
]
