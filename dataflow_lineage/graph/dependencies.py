"""
Dependency Resolver Module
==========================

Answer "what feeds this dataset / what consumes it" queries over a lineage
graph, and classify datasets by their position in the lineage.
"""

import logging
from typing import Dict, Iterable, List, Optional

from dataflow_lineage.core.data_structures import (
    Dataflow,
    DatasetSummary,
    DependencyRecord,
    DependencySide,
    LineageGraph,
)
from dataflow_lineage.core.enums import DatasetRole, EdgeType, NodeType

logger = logging.getLogger(__name__)


class DependencyResolver:
    """
    Resolve dataset dependencies over a lineage graph.

    The graph only keeps summary metadata for dataflows, so full records are
    joined back from the dataflow list the graph was built from. A dataflow
    with no matching record is returned as a summary built from its node.

    Example:
        >>> resolver = DependencyResolver(dataflows)
        >>> deps = resolver.get_dataset_dependencies(graph, "ds2")
        >>> [df.id for df in deps.upstream.dataflows]
    """

    def __init__(self, dataflows: Optional[Iterable[Dataflow]] = None):
        """
        Initialize the resolver.

        Args:
            dataflows: Dataflow records the graph was built from
        """
        self.dataflow_index: Dict[str, Dataflow] = {}
        for dataflow in dataflows or []:
            if dataflow.id:
                self.dataflow_index[dataflow.id] = dataflow

    def get_dataset_dependencies(self, graph: LineageGraph,
                                 dataset_id: str) -> Optional[DependencyRecord]:
        """
        Get upstream and downstream dependencies of a dataset.

        Args:
            graph: Lineage graph
            dataset_id: Dataset to analyze

        Returns:
            DependencyRecord, or None if the id is not a dataset in the graph
        """
        node = graph.get_node(dataset_id)
        if node is None or node.node_type is not NodeType.DATASET:
            logger.warning(f"Dataset {dataset_id} not found in graph")
            return None

        upstream_ids = self._unique(
            e.from_node for e in graph.get_edges_to(dataset_id, EdgeType.OUTPUT)
        )
        downstream_ids = self._unique(
            e.to_node for e in graph.get_edges_from(dataset_id, EdgeType.INPUT)
        )

        upstream_datasets = self._unique(
            e.from_node
            for dataflow_id in upstream_ids
            for e in graph.get_edges_to(dataflow_id, EdgeType.INPUT)
        )
        downstream_datasets = self._unique(
            e.to_node
            for dataflow_id in downstream_ids
            for e in graph.get_edges_from(dataflow_id, EdgeType.OUTPUT)
        )

        return DependencyRecord(
            dataset_id=dataset_id,
            dataset_name=node.name,
            upstream=DependencySide(
                dataflows=[self._resolve_dataflow(graph, i) for i in upstream_ids],
                datasets=[self._summarize(graph, i) for i in upstream_datasets],
            ),
            downstream=DependencySide(
                dataflows=[self._resolve_dataflow(graph, i) for i in downstream_ids],
                datasets=[self._summarize(graph, i) for i in downstream_datasets],
            ),
        )

    def get_dataflows_using_dataset(self, graph: LineageGraph,
                                    dataset_id: str) -> List[Dataflow]:
        """
        Get the dataflows that consume a dataset as input.

        Args:
            graph: Lineage graph
            dataset_id: Dataset id

        Returns:
            Full dataflow records, empty for unknown ids
        """
        node = graph.get_node(dataset_id)
        if node is None or node.node_type is not NodeType.DATASET:
            return []

        consumer_ids = self._unique(
            e.to_node for e in graph.get_edges_from(dataset_id, EdgeType.INPUT)
        )
        return [self._resolve_dataflow(graph, i) for i in consumer_ids]

    def classify_dataset(self, graph: LineageGraph,
                         dataset_id: str) -> Optional[DatasetRole]:
        """
        Classify a dataset as orphan, source, sink or intermediate.

        Returns:
            DatasetRole, or None if the id is not a dataset in the graph
        """
        dependencies = self.get_dataset_dependencies(graph, dataset_id)
        if dependencies is None:
            return None
        return DatasetRole.from_counts(
            len(dependencies.upstream.dataflows),
            len(dependencies.downstream.dataflows),
        )

    def classify_datasets(self, graph: LineageGraph) -> Dict[DatasetRole, List[DatasetSummary]]:
        """
        Group every dataset in the graph by role, sorted by name.
        """
        grouped: Dict[DatasetRole, List[DatasetSummary]] = {role: [] for role in DatasetRole}

        for node in graph.datasets():
            role = self.classify_dataset(graph, node.id)
            grouped[role].append(DatasetSummary(id=node.id, name=node.name))

        for summaries in grouped.values():
            summaries.sort(key=lambda s: s.name.lower())
        return grouped

    def _resolve_dataflow(self, graph: LineageGraph, dataflow_id: str) -> Dataflow:
        dataflow = self.dataflow_index.get(dataflow_id)
        if dataflow is not None:
            return dataflow
        node = graph.get_node(dataflow_id)
        return Dataflow(
            id=dataflow_id,
            name=node.name if node else None,
            status=node.metadata.get('status') if node else None,
        )

    @staticmethod
    def _summarize(graph: LineageGraph, dataset_id: str) -> DatasetSummary:
        node = graph.get_node(dataset_id)
        return DatasetSummary(id=dataset_id, name=node.name if node else dataset_id)

    @staticmethod
    def _unique(ids: Iterable[str]) -> List[str]:
        """Deduplicate preserving first-seen order"""
        seen = set()
        result = []
        for node_id in ids:
            if node_id not in seen:
                seen.add(node_id)
                result.append(node_id)
        return result


__all__ = [
    "DependencyResolver",
]
