"""
Orchestrator Module
===================

Main entry point tying the lineage components together.
"""

import json
import logging
import time
from typing import Any, Dict, Iterable, List, Optional

from dataflow_lineage.core.config import Config, get_default_config
from dataflow_lineage.core.data_structures import (
    Dataflow,
    DataPath,
    DependencyRecord,
    LineageGraph,
)
from dataflow_lineage.core.errors import DataflowParseError
from dataflow_lineage.graph.builder import DataflowLike, LineageGraphBuilder, coerce_dataflows
from dataflow_lineage.graph.dependencies import DependencyResolver
from dataflow_lineage.graph.traversal import find_entity_contributors, trace_data_path
from dataflow_lineage.analysis.statistics import StatisticsAnalyzer
from dataflow_lineage.visualization.mermaid import MermaidRenderer

logger = logging.getLogger(__name__)


def load_dataflows(path: str) -> List[Dataflow]:
    """
    Load a dataflow snapshot from a local JSON file.

    The file holds either a list of dataflow records or an object with a
    ``dataflows`` list.

    Raises:
        DataflowParseError: If the file does not hold dataflow records
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get('dataflows')
    if not isinstance(data, list):
        raise DataflowParseError(f"{path} does not contain a list of dataflows")

    dataflows, rejected = coerce_dataflows(data)
    if rejected:
        logger.warning(f"{rejected} records in {path} were not dataflow objects")
    return dataflows


class LineageAnalysisSystem:
    """
    Main orchestrator for dataflow lineage analysis.

    The graph is built once from a snapshot of dataflow records and shared,
    read-only, by every query.

    Example:
        >>> system = LineageAnalysisSystem()
        >>> system.load(dataflows)
        >>> result = system.analyze()
        >>> print(system.entity_diagram("ds2"))
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the lineage system.

        Args:
            config: Optional configuration object
        """
        self.config = config or get_default_config()
        self.builder = LineageGraphBuilder()
        self.analyzer = StatisticsAnalyzer(config=self.config.health)
        self.renderer = MermaidRenderer(config=self.config.diagram,
                                        traversal_config=self.config.traversal)
        self.dataflows: List[Dataflow] = []
        self.graph: Optional[LineageGraph] = None
        self.resolver = DependencyResolver()

    def load(self, dataflows: Iterable[DataflowLike]) -> LineageGraph:
        """
        Build the lineage graph from a dataflow snapshot.

        Args:
            dataflows: Dataflow objects or raw records

        Returns:
            The built LineageGraph
        """
        start = time.time()
        self.dataflows, _ = coerce_dataflows(dataflows)
        self.graph = self.builder.build_lineage_graph(self.dataflows)
        self.resolver = DependencyResolver(self.dataflows)

        if self.config.verbose:
            print(f"✓ Lineage graph: {len(self.graph.nodes)} nodes, "
                  f"{len(self.graph.edges)} edges ({time.time() - start:.2f}s)")
        return self.graph

    def load_file(self, path: str) -> LineageGraph:
        """Build the lineage graph from a local JSON snapshot."""
        return self.load(load_dataflows(path))

    def _require_graph(self) -> LineageGraph:
        if self.graph is None:
            raise RuntimeError("No lineage graph loaded; call load() first")
        return self.graph

    def analyze(self) -> Dict[str, Any]:
        """
        Complete analysis of the loaded snapshot.

        Returns:
            Dictionary with the graph, statistics, health score,
            dataset roles and recommendations
        """
        graph = self._require_graph()
        stats = self.analyzer.calculate_statistics(graph, self.dataflows)
        score = self.analyzer.calculate_health_score(stats)

        return {
            'graph': graph,
            'statistics': stats,
            'health_score': score,
            'health_label': self.analyzer.health_label(score),
            'dataset_roles': self.resolver.classify_datasets(graph),
            'status_groups': self.analyzer.group_dataflows_by_status(self.dataflows),
            'recommendations': self.analyzer.generate_recommendations(stats),
        }

    def dataset_lineage(self, dataset_id: str) -> Optional[DependencyRecord]:
        """Upstream and downstream dependencies of a dataset."""
        return self.resolver.get_dataset_dependencies(self._require_graph(), dataset_id)

    def dataflows_using(self, dataset_id: str) -> List[Dataflow]:
        """Dataflows consuming a dataset."""
        return self.resolver.get_dataflows_using_dataset(self._require_graph(), dataset_id)

    def entity_diagram(self, entity_id: Optional[str] = None,
                       max_depth: Any = None) -> str:
        """
        Mermaid diagram focused on an entity, or of the whole graph.
        """
        graph = self._require_graph()
        if entity_id is None:
            return self.renderer.generate_full_diagram(graph)
        return self.renderer.generate_focused_diagram(graph, entity_id, max_depth)

    def contributors(self, entity_id: str, max_depth: Any = None) -> set:
        """Contributor set of an entity."""
        if max_depth is None:
            max_depth = self.config.traversal.default_max_depth
        return find_entity_contributors(self._require_graph(), entity_id, max_depth,
                                        self.config.traversal)

    def trace(self, source_id: str, target_id: str) -> List[DataPath]:
        """All directed paths from one node to another."""
        return trace_data_path(self._require_graph(), source_id, target_id)

    def health(self) -> int:
        """Health score of the loaded snapshot."""
        stats = self.analyzer.calculate_statistics(self._require_graph(), self.dataflows)
        return self.analyzer.calculate_health_score(stats)


__all__ = [
    "LineageAnalysisSystem",
    "load_dataflows",
]
