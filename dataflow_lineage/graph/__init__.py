"""
Graph Module
============

Lineage graph construction and queries.

This module provides:
- LineageGraphBuilder: Build lineage graphs from dataflow records
- DependencyResolver: Upstream/downstream dependencies and dataset roles
- find_contributors: Bounded, cycle-safe reachability
- trace_data_path: All directed paths between two nodes
"""

from dataflow_lineage.graph.builder import (
    LineageGraphBuilder,
    build_lineage_graph,
    resolve_dataflow_status,
    coerce_dataflows,
)
from dataflow_lineage.graph.dependencies import DependencyResolver
from dataflow_lineage.graph.traversal import (
    clamp_depth,
    find_contributors,
    find_entity_contributors,
    trace_data_path,
)

__all__ = [
    "LineageGraphBuilder",
    "build_lineage_graph",
    "resolve_dataflow_status",
    "coerce_dataflows",
    "DependencyResolver",
    "clamp_depth",
    "find_contributors",
    "find_entity_contributors",
    "trace_data_path",
]
