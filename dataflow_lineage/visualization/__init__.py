"""
Visualization Module
====================

Lineage diagrams and static plots.

This module provides:
- MermaidRenderer: Mermaid flowchart text for full and focused lineage views
- LineageVisualizer: Layered matplotlib rendering of a lineage graph
"""

from dataflow_lineage.visualization.mermaid import MermaidRenderer
from dataflow_lineage.visualization.lineage_viz import LineageVisualizer

__all__ = [
    "MermaidRenderer",
    "LineageVisualizer",
]
