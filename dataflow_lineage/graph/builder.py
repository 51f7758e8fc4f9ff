"""
Lineage Graph Builder Module
============================

Build lineage graphs from dataflow records.

This module provides:
- resolve_dataflow_status: The status resolution policy for a dataflow record
- coerce_dataflows: Normalize raw records into Dataflow objects
- LineageGraphBuilder: Construct a LineageGraph of dataset and dataflow nodes
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from dataflow_lineage.core.data_structures import (
    Dataflow,
    DatasetReference,
    LineageEdge,
    LineageGraph,
    LineageNode,
)
from dataflow_lineage.core.enums import DataflowStatus, EdgeType, NodeType
from dataflow_lineage.core.errors import DataflowParseError

logger = logging.getLogger(__name__)

DataflowLike = Union[Dataflow, Mapping[str, Any]]

_EXECUTION_STATES = {
    'SUCCESS': DataflowStatus.ACTIVE,
    'FAILED': DataflowStatus.FAILED,
    'RUNNING': DataflowStatus.RUNNING,
}

_STATUS_VALUES = {
    'ACTIVE': DataflowStatus.ACTIVE,
    'SUCCESS': DataflowStatus.ACTIVE,
    'FAILED': DataflowStatus.FAILED,
    'RUNNING': DataflowStatus.RUNNING,
}


def resolve_dataflow_status(dataflow: Dataflow) -> DataflowStatus:
    """
    Resolve the operational status of a dataflow.

    Upstream fields can disagree, so they are consulted in a fixed order:
    last execution state, then the status field, then run state / enabled
    flag, then evidence of past successful runs. A record with no signal
    at all resolves to ACTIVE.

    Args:
        dataflow: Dataflow record

    Returns:
        DataflowStatus
    """
    # Execution state is matched case-sensitively
    state = dataflow.last_execution.state if dataflow.last_execution else None
    if state in _EXECUTION_STATES:
        return _EXECUTION_STATES[state]

    status = dataflow.status.upper() if isinstance(dataflow.status, str) else None
    if status in _STATUS_VALUES:
        return _STATUS_VALUES[status]

    run_state = dataflow.run_state.upper() if isinstance(dataflow.run_state, str) else None
    if run_state == 'ENABLED' or dataflow.enabled is True:
        return DataflowStatus.ACTIVE
    if run_state == 'DISABLED' or dataflow.enabled is False:
        return DataflowStatus.UNKNOWN

    if dataflow.last_successful_execution or (dataflow.execution_success_count or 0) > 0:
        return DataflowStatus.ACTIVE

    # TODO: confirm with data owners whether a record with no signal should be UNKNOWN
    return DataflowStatus.ACTIVE


def coerce_dataflows(records: Iterable[DataflowLike]) -> Tuple[List[Dataflow], int]:
    """
    Normalize a mix of Dataflow objects and raw records.

    Args:
        records: Dataflow objects or raw mappings

    Returns:
        Tuple of (parsed dataflows, number of unparseable records)
    """
    dataflows = []
    rejected = 0
    for record in records:
        if isinstance(record, Dataflow):
            dataflows.append(record)
            continue
        try:
            dataflows.append(Dataflow.from_dict(record))
        except DataflowParseError as e:
            logger.warning(f"Skipping dataflow record: {e}")
            rejected += 1
    return dataflows, rejected


class LineageGraphBuilder:
    """
    Build lineage graphs from dataflow records.

    Dataflow nodes are registered in a first pass so that every dataflow id
    is known before dataset references are resolved; dataset nodes and edges
    are added in a second pass. Nodes are merged get-or-create by id.

    Example:
        >>> builder = LineageGraphBuilder()
        >>> graph = builder.build_lineage_graph(dataflows)
        >>> len(graph.nodes), len(graph.edges)
    """

    def __init__(self):
        """Initialize the builder."""
        self.graph = LineageGraph()
        self.dataflow_index: Dict[str, Dataflow] = {}

    def build_lineage_graph(self, dataflows: Iterable[DataflowLike]) -> LineageGraph:
        """
        Build a lineage graph from dataflow records.

        Records without an id are skipped; the rest of the batch still
        produces a graph.

        Args:
            dataflows: Dataflow objects or raw records

        Returns:
            LineageGraph
        """
        parsed, rejected = coerce_dataflows(dataflows)
        logger.info(f"Building lineage graph from {len(parsed)} dataflows")

        # Reset state
        self.graph = LineageGraph()
        self.dataflow_index = {}
        self.graph.metadata = {
            'skipped_records': rejected,
            'skipped_references': 0,
            'type_conflicts': [],
        }

        valid = []
        for dataflow in parsed:
            if not dataflow.id:
                logger.warning(f"Skipping dataflow without id (name={dataflow.name!r})")
                self.graph.metadata['skipped_records'] += 1
                continue
            valid.append(dataflow)

        # First pass: dataflow nodes
        for dataflow in valid:
            self._add_dataflow_node(dataflow)
            self.dataflow_index[dataflow.id] = dataflow

        # Second pass: dataset nodes and edges
        for dataflow in valid:
            for ref in dataflow.inputs:
                if self._add_dataset_node(ref, dataflow):
                    self._add_edge(ref.data_source_id, dataflow.id, EdgeType.INPUT)

            for ref in dataflow.outputs:
                if self._add_dataset_node(ref, dataflow):
                    self._add_edge(dataflow.id, ref.data_source_id, EdgeType.OUTPUT)

        self.graph.metadata['dataflow_count'] = len(valid)
        logger.info(
            f"Graph built with {len(self.graph.nodes)} nodes and {len(self.graph.edges)} edges"
        )
        return self.graph

    def _add_dataflow_node(self, dataflow: Dataflow) -> None:
        """Create or merge the node for a dataflow record."""
        fields = {
            'owner': dataflow.owner_name,
            'last_updated': dataflow.last_updated,
            'success_rate': dataflow.success_rate,
            'execution_count': dataflow.execution_count,
        }

        node = self.graph.nodes.get(dataflow.id)
        if node is None:
            node = LineageNode(id=dataflow.id, name=dataflow.name, node_type=NodeType.DATAFLOW)
            self.graph.nodes[dataflow.id] = node
        elif dataflow.name:
            node.name = dataflow.name

        for key, value in fields.items():
            if value is not None:
                node.metadata[key] = value

        # Status depends only on the current record
        node.metadata['status'] = resolve_dataflow_status(dataflow).value

    def _add_dataset_node(self, ref: DatasetReference, dataflow: Dataflow) -> bool:
        """
        Create or merge the node for a dataset reference.

        Returns:
            True if the reference resolved to a dataset node
        """
        if not ref.data_source_id:
            logger.warning(f"Skipping dataset reference without id on dataflow {dataflow.id}")
            self.graph.metadata['skipped_references'] += 1
            return False

        node = self.graph.nodes.get(ref.data_source_id)
        if node is None:
            self.graph.nodes[ref.data_source_id] = LineageNode(
                id=ref.data_source_id,
                name=ref.name,
                node_type=NodeType.DATASET,
            )
            return True

        if node.node_type is not NodeType.DATASET:
            self._record_type_conflict(node, dataflow)
            return False

        if ref.name:
            node.name = ref.name
        return True

    def _record_type_conflict(self, node: LineageNode, dataflow: Dataflow) -> None:
        logger.warning(
            f"Id {node.id} is a {node.node_type.value} but dataflow {dataflow.id} "
            f"references it as a dataset; reference ignored"
        )
        self.graph.metadata['type_conflicts'].append({
            'id': node.id,
            'existing_type': node.node_type.value,
            'referenced_as': NodeType.DATASET.value,
            'dataflow_id': dataflow.id,
        })

    def _add_edge(self, from_node: str, to_node: str, edge_type: EdgeType) -> None:
        self.graph.edges.append(LineageEdge(from_node=from_node, to_node=to_node, edge_type=edge_type))


def build_lineage_graph(dataflows: Iterable[DataflowLike]) -> LineageGraph:
    """Build a lineage graph with a fresh builder."""
    return LineageGraphBuilder().build_lineage_graph(dataflows)


__all__ = [
    "resolve_dataflow_status",
    "coerce_dataflows",
    "LineageGraphBuilder",
    "build_lineage_graph",
]
