"""
Mermaid Diagram Module
======================

Render lineage graphs as Mermaid flowchart text.

Diagrams list node declarations first, then edge declarations, both in
graph iteration order, then class definitions. Datasets render as
rectangles, dataflows as rounded boxes; a highlighted seed node gets its
own class.
"""

from typing import Any, Iterable, List, Optional, Set

from dataflow_lineage.core.config import DiagramConfig, TraversalConfig
from dataflow_lineage.core.data_structures import Dataflow, LineageGraph, LineageNode
from dataflow_lineage.core.enums import NodeType
from dataflow_lineage.graph.traversal import find_entity_contributors


class MermaidRenderer:
    """
    Render lineage graphs and subsets of them as Mermaid diagrams.

    Example:
        >>> renderer = MermaidRenderer()
        >>> text = renderer.generate_focused_diagram(graph, "ds2", max_depth=3)
    """

    def __init__(self, config: Optional[DiagramConfig] = None,
                 traversal_config: Optional[TraversalConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Optional diagram configuration
            traversal_config: Optional traversal configuration for focused diagrams
        """
        self.config = config or DiagramConfig()
        self.traversal_config = traversal_config or TraversalConfig()

    @staticmethod
    def escape_label(name: str) -> str:
        """Mermaid labels are double-quoted, so inner quotes become single quotes."""
        return name.replace('"', "'")

    def node_declaration(self, node: LineageNode, highlight: bool = False) -> str:
        label = self.escape_label(node.name)
        css_class = node.node_type.value + ("-highlight" if highlight else "")
        if node.node_type is NodeType.DATASET:
            return f'    {node.id}["{label}"]:::{css_class}'
        return f'    {node.id}("{label}"):::{css_class}'

    def class_definitions(self, include_highlight: bool = False) -> List[str]:
        lines = [
            "",
            f"    classDef dataset {self.config.dataset_style}",
            f"    classDef dataflow {self.config.dataflow_style}",
        ]
        if include_highlight:
            lines.append(f"    classDef dataset-highlight {self.config.dataset_highlight_style}")
            lines.append(f"    classDef dataflow-highlight {self.config.dataflow_highlight_style}")
        return lines

    def generate_diagram(self, graph: LineageGraph, contributors: Iterable[str],
                         highlight_id: Optional[str] = None) -> str:
        """
        Render the nodes in a contributor set and the edges between them.

        Args:
            graph: Lineage graph
            contributors: Node ids to include
            highlight_id: Seed node to distinguish visually

        Returns:
            Mermaid diagram text
        """
        included: Set[str] = set(contributors)
        lines = [f"graph {self.config.direction}"]

        for node in graph.nodes.values():
            if node.id in included:
                lines.append(self.node_declaration(node, highlight=node.id == highlight_id))

        for edge in graph.edges:
            if edge.from_node in included and edge.to_node in included:
                lines.append(f"    {edge.from_node} {edge.edge_type.arrow} {edge.to_node}")

        lines.extend(self.class_definitions(include_highlight=highlight_id is not None))
        return "\n".join(lines)

    def generate_full_diagram(self, graph: LineageGraph) -> str:
        """Render every node and edge of the graph."""
        return self.generate_diagram(graph, graph.nodes.keys())

    def generate_focused_diagram(self, graph: LineageGraph, entity_id: str,
                                 max_depth: Any = None) -> str:
        """
        Render the lineage around one entity.

        Args:
            graph: Lineage graph
            entity_id: Dataset or dataflow at the centre
            max_depth: Traversal depth, clamped to the configured range
        """
        if entity_id not in graph:
            return f"graph {self.config.direction}\n    NoData[No data found]"

        if max_depth is None:
            max_depth = self.traversal_config.default_max_depth
        contributors = find_entity_contributors(graph, entity_id, max_depth, self.traversal_config)
        return self.generate_diagram(graph, contributors, highlight_id=entity_id)

    def generate_mermaid_diagram(self, graph: LineageGraph,
                                 max_nodes: Optional[int] = None) -> str:
        """
        Overview diagram limited to the first ``max_nodes`` nodes.
        """
        limit = self.config.max_nodes if max_nodes is None else max_nodes
        return self.generate_diagram(graph, list(graph.nodes)[:limit])

    def generate_dataflow_diagram(self, dataflow: Dataflow) -> str:
        """
        Left-to-right diagram of a single dataflow with its inputs and outputs.
        """
        lines = ["graph LR"]

        for idx, ref in enumerate(dataflow.inputs):
            name = self.escape_label(ref.name or ref.data_source_id)
            lines.append(f'    input{idx}["{name}"]:::dataset')
            lines.append(f"    input{idx} --> dataflow")

        lines.append(f'    dataflow("{self.escape_label(dataflow.name or dataflow.id)}"):::dataflow')

        for idx, ref in enumerate(dataflow.outputs):
            name = self.escape_label(ref.name or ref.data_source_id)
            lines.append(f"    dataflow --> output{idx}")
            lines.append(f'    output{idx}["{name}"]:::dataset')

        lines.extend(self.class_definitions())
        return "\n".join(lines)


__all__ = [
    "MermaidRenderer",
]
