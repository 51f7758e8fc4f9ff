"""
Core Module
===========

Fundamental data structures, enums, errors and configuration for the
lineage system.

This module provides:
- Data structures for dataflow records and the lineage graph
- Enumerations for node types, edge types, statuses and dataset roles
- Configuration management for system-wide settings
"""

from dataflow_lineage.core.data_structures import (
    DatasetReference,
    DataflowExecution,
    Dataflow,
    LineageNode,
    LineageEdge,
    LineageGraph,
    DatasetSummary,
    DependencySide,
    DependencyRecord,
    DataPath,
    LineageStatistics,
)

from dataflow_lineage.core.enums import (
    NodeType,
    EdgeType,
    DataflowStatus,
    DatasetRole,
    TraversalDirection,
)

from dataflow_lineage.core.config import (
    Config,
    TraversalConfig,
    DiagramConfig,
    HealthConfig,
    VisualizationConfig,
    get_default_config,
    get_config_from_env,
)

from dataflow_lineage.core.errors import (
    LineageError,
    DataflowParseError,
    ConfigError,
)

__all__ = [
    # Data structures
    "DatasetReference",
    "DataflowExecution",
    "Dataflow",
    "LineageNode",
    "LineageEdge",
    "LineageGraph",
    "DatasetSummary",
    "DependencySide",
    "DependencyRecord",
    "DataPath",
    "LineageStatistics",

    # Enums
    "NodeType",
    "EdgeType",
    "DataflowStatus",
    "DatasetRole",
    "TraversalDirection",

    # Configuration
    "Config",
    "TraversalConfig",
    "DiagramConfig",
    "HealthConfig",
    "VisualizationConfig",
    "get_default_config",
    "get_config_from_env",

    # Errors
    "LineageError",
    "DataflowParseError",
    "ConfigError",
]
