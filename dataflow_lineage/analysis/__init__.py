"""
Analysis Module
===============

Graph-wide statistics and pipeline health scoring.
"""

from dataflow_lineage.analysis.statistics import StatisticsAnalyzer

__all__ = [
    "StatisticsAnalyzer",
]
