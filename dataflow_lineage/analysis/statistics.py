"""
Statistics Analyzer Module
==========================

Graph-wide lineage statistics and the derived pipeline health score.

This module provides the StatisticsAnalyzer class which:
- Counts dataflows, datasets and orphaned datasets
- Recomputes dataflow status from the raw records
- Derives a bounded health score and recommendations
- Summarizes dataflows by status, owner and type
"""

import math
from collections import Counter
from typing import Dict, Iterable, List, Optional

from dataflow_lineage.core.config import HealthConfig
from dataflow_lineage.core.data_structures import Dataflow, LineageGraph, LineageStatistics
from dataflow_lineage.core.enums import DataflowStatus, EdgeType
from dataflow_lineage.graph.builder import coerce_dataflows, resolve_dataflow_status


class StatisticsAnalyzer:
    """
    Aggregate lineage statistics and score pipeline health.

    Example:
        >>> analyzer = StatisticsAnalyzer()
        >>> stats = analyzer.calculate_statistics(graph, dataflows)
        >>> analyzer.calculate_health_score(stats)
        100
    """

    def __init__(self, config: Optional[HealthConfig] = None):
        """
        Initialize analyzer.

        Args:
            config: Optional health score configuration
        """
        self.config = config or HealthConfig()

    def calculate_statistics(self, graph: LineageGraph,
                             dataflows: Iterable[Dataflow]) -> LineageStatistics:
        """
        Calculate graph-wide statistics.

        Status counts are recomputed from the raw records rather than read
        from node metadata, so they do not depend on merge order.

        Args:
            graph: Lineage graph built from ``dataflows``
            dataflows: Dataflow records

        Returns:
            LineageStatistics
        """
        parsed, _ = coerce_dataflows(dataflows)
        records = [df for df in parsed if df.id]

        status_counts = Counter(resolve_dataflow_status(df) for df in records)

        connected = graph.connected_node_ids()
        datasets = graph.datasets()
        # Zero for builder output: datasets are only created with an edge
        orphaned = sum(1 for ds in datasets if ds.id not in connected)

        total = len(records)
        return LineageStatistics(
            total_dataflows=total,
            total_datasets=len(datasets),
            active_dataflows=status_counts[DataflowStatus.ACTIVE],
            failed_dataflows=status_counts[DataflowStatus.FAILED],
            running_dataflows=status_counts[DataflowStatus.RUNNING],
            unknown_dataflows=status_counts[DataflowStatus.UNKNOWN],
            orphaned_datasets=orphaned,
            avg_inputs_per_dataflow=graph.count_edges(EdgeType.INPUT) / total if total else 0.0,
            avg_outputs_per_dataflow=graph.count_edges(EdgeType.OUTPUT) / total if total else 0.0,
        )

    def calculate_health_score(self, stats: LineageStatistics) -> int:
        """
        Score pipeline health from 0 to 100.

        Deducts for the failure rate, the orphan rate and very complex
        dataflows. A zero denominator skips its deduction.

        Args:
            stats: Lineage statistics

        Returns:
            Integer score in [0, 100]
        """
        score = 100.0

        if stats.total_dataflows > 0:
            failure_rate = stats.failed_dataflows / stats.total_dataflows
            score -= failure_rate * self.config.failure_weight

        if stats.total_datasets > 0:
            orphan_rate = stats.orphaned_datasets / stats.total_datasets
            score -= orphan_rate * self.config.orphan_weight

        if stats.avg_inputs_per_dataflow > self.config.complexity_threshold:
            score -= self.config.complexity_penalty

        # Halves round up
        return int(min(100, max(0, math.floor(score + 0.5))))

    @staticmethod
    def health_label(score: int) -> str:
        """Human-readable band for a health score"""
        if score >= 80:
            return "Excellent"
        if score >= 60:
            return "Good"
        if score >= 40:
            return "Fair"
        return "Needs Attention"

    @staticmethod
    def status_indicator(ratio: float) -> str:
        """Indicator for a 0-1 health ratio"""
        if ratio >= 0.9:
            return "GOOD"
        if ratio >= 0.7:
            return "OK"
        if ratio >= 0.5:
            return "WARN"
        return "FAIL"

    def generate_recommendations(self, stats: LineageStatistics) -> List[str]:
        """Recommendations derived from the statistics."""
        recommendations = []

        if stats.failed_dataflows > stats.total_dataflows * 0.1:
            recommendations.append(
                "High Priority: Address failed dataflows - more than 10% are failing"
            )

        if stats.orphaned_datasets > stats.total_datasets * 0.2:
            recommendations.append(
                "Medium Priority: Clean up orphaned datasets - over 20% are unused"
            )

        if stats.avg_inputs_per_dataflow > self.config.complexity_threshold:
            recommendations.append(
                "Low Priority: Consider breaking down complex dataflows with many inputs"
            )

        if not recommendations:
            recommendations.append(
                "Your data pipeline is well-maintained! Continue regular monitoring."
            )

        return recommendations

    @staticmethod
    def group_dataflows_by_status(dataflows: Iterable[Dataflow]) -> Dict[DataflowStatus, List[Dataflow]]:
        """Group dataflow records by resolved status, in report order."""
        grouped: Dict[DataflowStatus, List[Dataflow]] = {
            status: [] for status in DataflowStatus.get_report_order()
        }
        for dataflow in dataflows:
            grouped[resolve_dataflow_status(dataflow)].append(dataflow)
        return grouped

    @staticmethod
    def get_top_owners(dataflows: Iterable[Dataflow]) -> List[Dict]:
        """
        Dataflow counts and last-run success rates per owner, busiest first.
        """
        counts: Counter = Counter()
        successes: Counter = Counter()

        for dataflow in dataflows:
            owner = dataflow.owner_name or "Unknown"
            counts[owner] += 1
            if dataflow.last_execution and dataflow.last_execution.state == "SUCCESS":
                successes[owner] += 1

        return [
            {
                'name': owner,
                'count': count,
                'success_rate': successes[owner] / count * 100,
            }
            for owner, count in counts.most_common()
        ]

    @staticmethod
    def get_dataflow_types(dataflows: Iterable[Dataflow]) -> List[Dict]:
        """Dataflow counts per engine type, most common first."""
        counts = Counter(dataflow.data_flow_type or "Standard" for dataflow in dataflows)
        return [{'type': t, 'count': c} for t, c in counts.most_common()]


__all__ = [
    "StatisticsAnalyzer",
]
