"""
Reachability Traversal Module
=============================

Bounded-depth, cycle-safe traversal over a lineage graph.

This module provides:
- clamp_depth: Clamp a requested depth to the allowed range
- find_contributors: Breadth-first contributor set in a given direction
- find_entity_contributors: Contributor set used for focused diagrams
- trace_data_path: All simple directed paths between two nodes
"""

import logging
from collections import deque
from typing import Any, Dict, List, Optional, Set

import networkx as nx

from dataflow_lineage.core.config import TraversalConfig
from dataflow_lineage.core.data_structures import DataPath, LineageEdge, LineageGraph
from dataflow_lineage.core.enums import NodeType, TraversalDirection

logger = logging.getLogger(__name__)


def clamp_depth(max_depth: Any, config: Optional[TraversalConfig] = None) -> int:
    """
    Clamp a requested traversal depth to the configured range.

    Args:
        max_depth: Requested depth; floats are clamped then truncated,
            values that do not convert to int fall back to the default
        config: Optional traversal configuration

    Returns:
        Depth within [config.min_depth, config.max_depth]
    """
    config = config or TraversalConfig()
    # NaN compares unequal to itself and falls through to the default
    if isinstance(max_depth, float) and max_depth == max_depth:
        max_depth = max(config.min_depth, min(config.max_depth, max_depth))
    if isinstance(max_depth, bool) or not isinstance(max_depth, int):
        try:
            max_depth = int(max_depth)
        except (TypeError, ValueError, OverflowError):
            max_depth = config.default_max_depth
    return max(config.min_depth, min(config.max_depth, max_depth))


def _neighbors(graph: LineageGraph, node_id: str,
               direction: TraversalDirection) -> List[str]:
    if direction is TraversalDirection.UPSTREAM:
        return [e.from_node for e in graph.edges if e.to_node == node_id]
    return [e.to_node for e in graph.edges if e.from_node == node_id]


def _bfs(graph: LineageGraph, seed: str, direction: TraversalDirection,
         depth_limit: int) -> Set[str]:
    visited = {seed}
    queue = deque([(seed, 0)])

    while queue:
        node_id, depth = queue.popleft()
        if depth >= depth_limit:
            continue
        for neighbor in _neighbors(graph, node_id, direction):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append((neighbor, depth + 1))

    return visited


def find_contributors(graph: LineageGraph, entity_id: str,
                      direction: TraversalDirection = TraversalDirection.UPSTREAM,
                      max_depth: Any = 3,
                      config: Optional[TraversalConfig] = None) -> Set[str]:
    """
    Find the nodes reachable from a seed within a depth limit.

    The seed sits at depth 0. A node already visited is never enqueued
    again, which is what makes the traversal terminate on cyclic graphs.

    Args:
        graph: Lineage graph
        entity_id: Seed node id
        direction: UPSTREAM walks edges backward, DOWNSTREAM forward,
            BOTH unions the two
        max_depth: Depth limit, clamped to [1, 10]
        config: Optional traversal configuration

    Returns:
        Set of node ids including the seed; empty if the seed is unknown
    """
    if entity_id not in graph:
        logger.warning(f"Entity {entity_id} not found in graph")
        return set()

    if isinstance(direction, str):
        direction = TraversalDirection(direction)

    depth_limit = clamp_depth(max_depth, config)

    if direction is TraversalDirection.BOTH:
        return (_bfs(graph, entity_id, TraversalDirection.UPSTREAM, depth_limit)
                | _bfs(graph, entity_id, TraversalDirection.DOWNSTREAM, depth_limit))
    return _bfs(graph, entity_id, direction, depth_limit)


def find_entity_contributors(graph: LineageGraph, entity_id: str,
                             max_depth: Any = 3,
                             config: Optional[TraversalConfig] = None) -> Set[str]:
    """
    Contributor set for a focused lineage view.

    Datasets show what feeds them (upstream only); dataflows show both their
    inputs and what they feed.
    """
    node = graph.get_node(entity_id)
    if node is None:
        logger.warning(f"Entity {entity_id} not found in graph")
        return set()

    direction = (TraversalDirection.UPSTREAM if node.node_type is NodeType.DATASET
                 else TraversalDirection.BOTH)
    return find_contributors(graph, entity_id, direction, max_depth, config)


def trace_data_path(graph: LineageGraph, source_id: str, target_id: str) -> List[DataPath]:
    """
    Trace all simple directed paths between two nodes.

    Args:
        graph: Lineage graph
        source_id: Source node id (dataset or dataflow)
        target_id: Target node id (dataset or dataflow)

    Returns:
        List of DataPath, shortest first; empty if either node is unknown
        or no path exists
    """
    if source_id not in graph or target_id not in graph:
        logger.warning("Source or target node not found in graph")
        return []

    if source_id == target_id:
        return [DataPath(nodes=[graph.nodes[source_id]], edges=[], distance=0)]

    # Parallel edges would repeat paths, so search a simple digraph
    G = nx.DiGraph()
    G.add_nodes_from(graph.nodes)
    first_edge: Dict[tuple, LineageEdge] = {}
    for edge in graph.edges:
        key = (edge.from_node, edge.to_node)
        if key not in first_edge:
            first_edge[key] = edge
            G.add_edge(*key)

    paths = []
    for node_path in nx.all_simple_paths(G, source_id, target_id):
        edges = [first_edge[(a, b)] for a, b in zip(node_path, node_path[1:])]
        paths.append(DataPath(
            nodes=[graph.nodes[n] for n in node_path],
            edges=edges,
            distance=len(edges),
        ))

    paths.sort(key=lambda p: p.distance)
    logger.info(f"Found {len(paths)} paths from {source_id} to {target_id}")
    return paths


__all__ = [
    "clamp_depth",
    "find_contributors",
    "find_entity_contributors",
    "trace_data_path",
]
