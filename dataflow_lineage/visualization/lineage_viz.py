"""
Lineage Visualizer Module
=========================

Static matplotlib rendering of lineage graphs.

Nodes are laid out in layers by their distance from the sources of the
graph, datasets drawn as squares and dataflows as circles.
"""

from typing import Dict, Iterable, Optional, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import networkx as nx
import numpy as np

from dataflow_lineage.core.config import VisualizationConfig
from dataflow_lineage.core.data_structures import LineageGraph
from dataflow_lineage.core.enums import EdgeType, NodeType


class LineageVisualizer:
    """
    Render a lineage graph, or a contributor subset of it, to a figure.

    Example:
        >>> visualizer = LineageVisualizer()
        >>> fig = visualizer.visualize_lineage(graph, highlight_id="ds2")
        >>> fig.savefig('lineage.png', dpi=150, bbox_inches='tight')
    """

    def __init__(self, config: Optional[VisualizationConfig] = None):
        """
        Initialize visualizer.

        Args:
            config: Optional visualization configuration
        """
        self.config = config or VisualizationConfig()

    @staticmethod
    def _wrap_label(text: str, max_chars: int = 18) -> str:
        if len(text) <= max_chars:
            return text
        return text[:max_chars - 3] + '...'

    def compute_layout(self, G: nx.DiGraph) -> Dict[str, Tuple[float, float]]:
        """
        Layered layout: x is the hop distance from the nearest source node.

        Nodes only reachable through a cycle sit in layer 0.
        """
        sources = [n for n in G.nodes if G.in_degree(n) == 0]
        layers: Dict[str, int] = {n: 0 for n in G.nodes}
        if sources:
            distances = nx.multi_source_dijkstra_path_length(G, sources)
            layers.update({n: int(d) for n, d in distances.items()})

        by_layer: Dict[int, list] = {}
        for node_id in G.nodes:
            by_layer.setdefault(layers[node_id], []).append(node_id)

        pos = {}
        for layer, members in by_layer.items():
            ys = np.linspace(0, -(len(members) - 1), len(members)) if len(members) > 1 else np.zeros(1)
            ys = ys - ys.mean()
            for node_id, y in zip(members, ys):
                pos[node_id] = (float(layer) * 2.0, float(y))
        return pos

    def visualize_lineage(self, graph: LineageGraph,
                          node_ids: Optional[Iterable[str]] = None,
                          highlight_id: Optional[str] = None,
                          title: str = "Data Lineage",
                          figsize: Optional[Tuple] = None) -> plt.Figure:
        """
        Draw the lineage graph.

        Args:
            graph: Lineage graph
            node_ids: Optional subset of nodes to draw
            highlight_id: Node to highlight
            title: Figure title
            figsize: Optional figure size

        Returns:
            Matplotlib figure
        """
        included = set(graph.nodes) if node_ids is None else set(node_ids)

        G = nx.DiGraph()
        for node in graph.nodes.values():
            if node.id in included:
                G.add_node(node.id, node_type=node.node_type, name=node.name)
        for edge in graph.edges:
            if edge.from_node in included and edge.to_node in included:
                G.add_edge(edge.from_node, edge.to_node, edge_type=edge.edge_type)

        fig, ax = plt.subplots(figsize=figsize or self.config.figsize)
        ax.axis('off')
        ax.set_title(title, fontsize=14, fontweight='bold', pad=15)

        if G.number_of_nodes() == 0:
            ax.text(0.5, 0.5, "No data found", ha='center', va='center', fontsize=12)
            return fig

        pos = self.compute_layout(G)

        for node_type, shape in ((NodeType.DATASET, 's'), (NodeType.DATAFLOW, 'o')):
            members = [n for n, d in G.nodes(data=True) if d['node_type'] is node_type]
            if not members:
                continue
            base = (self.config.dataset_color if node_type is NodeType.DATASET
                    else self.config.dataflow_color)
            colors = [self.config.highlight_color if n == highlight_id else base for n in members]
            nx.draw_networkx_nodes(G, pos, nodelist=members, node_shape=shape,
                                   node_color=colors, node_size=1800,
                                   edgecolors='#555', ax=ax)

        for edge_type, style in ((EdgeType.INPUT, 'solid'), (EdgeType.OUTPUT, 'dashed')):
            edgelist = [(u, v) for u, v, d in G.edges(data=True) if d['edge_type'] is edge_type]
            if edgelist:
                nx.draw_networkx_edges(G, pos, edgelist=edgelist, style=style,
                                       arrows=True, arrowsize=18, node_size=1800,
                                       edge_color='#666', ax=ax)

        labels = {n: self._wrap_label(d['name']) for n, d in G.nodes(data=True)}
        nx.draw_networkx_labels(G, pos, labels=labels, font_size=8, ax=ax)

        ax.legend(handles=[
            mpatches.Patch(color=self.config.dataset_color, label='Dataset'),
            mpatches.Patch(color=self.config.dataflow_color, label='Dataflow'),
        ], loc='upper right')

        plt.tight_layout()
        return fig

    def save(self, fig: plt.Figure, output_file: str) -> None:
        """Save a figure and release it."""
        fig.savefig(output_file, dpi=self.config.dpi, bbox_inches='tight')
        plt.close(fig)


__all__ = [
    "LineageVisualizer",
]
