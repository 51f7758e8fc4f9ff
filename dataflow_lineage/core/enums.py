"""
Enumerations Module
===================

Defines all enumeration types used throughout the lineage system.

This module contains:
- NodeType: Types of nodes in the lineage graph
- EdgeType: Types of edges between datasets and dataflows
- DataflowStatus: Resolved operational status of a dataflow
- DatasetRole: Position of a dataset within the lineage
- TraversalDirection: Direction for reachability queries
"""

from enum import Enum
from typing import List


class NodeType(Enum):
    """
    Types of nodes in the lineage graph.

    - DATASET: A tabular data resource
    - DATAFLOW: A transformation job consuming and producing datasets
    """
    DATASET = "dataset"
    DATAFLOW = "dataflow"

    def __str__(self) -> str:
        return self.value


class EdgeType(Enum):
    """
    Types of edges in the lineage graph.

    - INPUT: dataset -> dataflow (the dataflow consumes the dataset)
    - OUTPUT: dataflow -> dataset (the dataflow produces the dataset)
    """
    INPUT = "input"
    OUTPUT = "output"

    def __str__(self) -> str:
        return self.value

    @property
    def arrow(self) -> str:
        """Mermaid arrow used when rendering this edge"""
        return "-->" if self is EdgeType.INPUT else "==>"


class DataflowStatus(Enum):
    """
    Operational status of a dataflow after resolving its status fields.
    """
    ACTIVE = "active"
    FAILED = "failed"
    RUNNING = "running"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        """Get human-readable display name"""
        return self.value.title()

    @classmethod
    def get_report_order(cls) -> List['DataflowStatus']:
        """Order in which status groups are reported"""
        return [cls.ACTIVE, cls.FAILED, cls.RUNNING, cls.UNKNOWN]


class DatasetRole(Enum):
    """
    Role of a dataset given its upstream/downstream dataflow counts.

    - ORPHAN: no producing and no consuming dataflow
    - SOURCE: only consumed
    - SINK: only produced
    - INTERMEDIATE: both produced and consumed
    """
    ORPHAN = "orphan"
    SOURCE = "source"
    SINK = "sink"
    INTERMEDIATE = "intermediate"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_counts(cls, upstream: int, downstream: int) -> 'DatasetRole':
        """Classify from upstream and downstream dataflow counts"""
        if upstream == 0 and downstream == 0:
            return cls.ORPHAN
        if upstream == 0:
            return cls.SOURCE
        if downstream == 0:
            return cls.SINK
        return cls.INTERMEDIATE


class TraversalDirection(Enum):
    """
    Direction followed by reachability traversal.

    - UPSTREAM: walk edges backward, toward sources
    - DOWNSTREAM: walk edges forward, toward sinks
    - BOTH: union of the two
    """
    UPSTREAM = "upstream"
    DOWNSTREAM = "downstream"
    BOTH = "both"

    def __str__(self) -> str:
        return self.value


__all__ = [
    "NodeType",
    "EdgeType",
    "DataflowStatus",
    "DatasetRole",
    "TraversalDirection",
]
