"""
Dataflow Lineage Analysis System
================================

Build a lineage graph of datasets and dataflows from a snapshot of dataflow
records, and answer dependency, reachability and health queries against it.

Main Components:
- Core: Data structures, enums, errors and configuration
- Graph: Graph construction, dependency resolution and traversal
- Analysis: Statistics and health scoring
- Visualization: Mermaid diagrams and static matplotlib plots

Usage:
    >>> from dataflow_lineage import LineageAnalysisSystem
    >>> system = LineageAnalysisSystem()
    >>> system.load_file("dataflows.json")
    >>> result = system.analyze()
    >>> print(system.entity_diagram("ds2", max_depth=3))

    # Or use the components directly
    >>> from dataflow_lineage import build_lineage_graph, DependencyResolver
    >>> graph = build_lineage_graph(records)
    >>> DependencyResolver().get_dataset_dependencies(graph, "ds2")
"""

__version__ = "0.1.0"
__license__ = "MIT"

from dataflow_lineage.core.data_structures import (
    Dataflow,
    DatasetReference,
    LineageNode,
    LineageEdge,
    LineageGraph,
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
    get_default_config,
)

from dataflow_lineage.core.errors import (
    LineageError,
    DataflowParseError,
    ConfigError,
)

from dataflow_lineage.graph.builder import (
    LineageGraphBuilder,
    build_lineage_graph,
    resolve_dataflow_status,
)
from dataflow_lineage.graph.dependencies import DependencyResolver
from dataflow_lineage.graph.traversal import (
    find_contributors,
    find_entity_contributors,
    trace_data_path,
)
from dataflow_lineage.analysis.statistics import StatisticsAnalyzer
from dataflow_lineage.visualization.mermaid import MermaidRenderer

# Main orchestrator
from dataflow_lineage.orchestrator import (
    LineageAnalysisSystem,
    load_dataflows,
)

__all__ = [
    # Version info
    "__version__",
    "__license__",

    # Main system
    "LineageAnalysisSystem",
    "load_dataflows",

    # Core data structures
    "Dataflow",
    "DatasetReference",
    "LineageNode",
    "LineageEdge",
    "LineageGraph",
    "DependencyRecord",
    "DataPath",
    "LineageStatistics",

    # Enums
    "NodeType",
    "EdgeType",
    "DataflowStatus",
    "DatasetRole",
    "TraversalDirection",

    # Configuration and errors
    "Config",
    "get_default_config",
    "LineageError",
    "DataflowParseError",
    "ConfigError",

    # Components
    "LineageGraphBuilder",
    "build_lineage_graph",
    "resolve_dataflow_status",
    "DependencyResolver",
    "find_contributors",
    "find_entity_contributors",
    "trace_data_path",
    "StatisticsAnalyzer",
    "MermaidRenderer",
]
