"""
Data Structures Module
======================

Core data structures for representing dataflow lineage.

This module defines:
- DatasetReference: An input or output reference on a dataflow record
- DataflowExecution: The last execution summary of a dataflow
- Dataflow: A dataflow record as supplied by the data source
- LineageNode: Nodes in the lineage graph
- LineageEdge: Edges in the lineage graph
- LineageGraph: The complete lineage graph
- DatasetSummary: Id/name pair for a dataset
- DependencyRecord: Upstream/downstream dependencies of a dataset
- DataPath: A path through the lineage graph
- LineageStatistics: Graph-wide counts used for health scoring
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Set, Any, Optional, Mapping
import networkx as nx

from dataflow_lineage.core.enums import NodeType, EdgeType
from dataflow_lineage.core.errors import DataflowParseError


DEFAULT_NODE_NAME = "Unnamed"


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _reference_list(data: Mapping[str, Any], key: str) -> List['DatasetReference']:
    """Parse an inputs/outputs list; non-mapping entries are dropped"""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise DataflowParseError(
            f"Dataflow {data.get('id')!r}: {key} must be a list, got {type(value).__name__}"
        )
    return [DatasetReference.from_dict(ref) for ref in value if isinstance(ref, Mapping)]


@dataclass
class DatasetReference:
    """
    Reference from a dataflow to one of its input or output datasets.

    Attributes:
        data_source_id: Id of the referenced dataset
        name: Dataset display name, if the record carries one
    """
    data_source_id: str
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DatasetReference':
        """Create reference from the upstream camelCase shape"""
        return cls(
            data_source_id=_optional_str(data.get('dataSourceId')) or "",
            name=_optional_str(data.get('name')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'dataSourceId': self.data_source_id, 'name': self.name}


@dataclass
class DataflowExecution:
    """Summary of the most recent execution of a dataflow."""
    state: Optional[str] = None
    begin_time: Optional[Any] = None
    end_time: Optional[Any] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DataflowExecution':
        state = data.get('state')
        return cls(
            state=state if isinstance(state, str) else None,
            begin_time=data.get('beginTime'),
            end_time=data.get('endTime'),
        )


@dataclass
class Dataflow:
    """
    A dataflow record supplied by the data source.

    Only ``id`` is required for the record to take part in the lineage.
    Status-related fields feed status resolution; the remaining fields are
    carried through to node metadata and reports.

    Attributes:
        id: Dataflow identifier (empty when the record had none)
        name: Display name
        inputs: Datasets consumed by the dataflow
        outputs: Datasets produced by the dataflow
        last_execution: Last execution summary
        status: Free-form status string
        run_state: ENABLED/DISABLED style run state
        enabled: Enabled flag
        last_successful_execution: Timestamp of last successful run
        execution_success_count: Number of successful runs
        execution_count: Number of runs
        success_rate: Success rate reported by the source
        owner: Owner display name
        owners: Owner records
        last_updated: Last update timestamp
        data_flow_type: Engine type (MySQL, Magic ETL, ...)
        description: Description text
        raw: The original record
    """
    id: str
    name: Optional[str] = None
    inputs: List[DatasetReference] = field(default_factory=list)
    outputs: List[DatasetReference] = field(default_factory=list)
    last_execution: Optional[DataflowExecution] = None
    status: Optional[str] = None
    run_state: Optional[str] = None
    enabled: Optional[bool] = None
    last_successful_execution: Optional[Any] = None
    execution_success_count: Optional[int] = None
    execution_count: Optional[int] = None
    success_rate: Optional[float] = None
    owner: Optional[str] = None
    owners: List[Dict[str, Any]] = field(default_factory=list)
    last_updated: Optional[str] = None
    data_flow_type: Optional[str] = None
    description: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Dataflow':
        """
        Create a dataflow from a raw record.

        Args:
            data: Record in the data source's camelCase shape

        Returns:
            Dataflow

        Raises:
            DataflowParseError: If the record is not a mapping or its
                inputs/outputs are not lists
        """
        if not isinstance(data, Mapping):
            raise DataflowParseError(
                f"Dataflow record must be a mapping, got {type(data).__name__}"
            )

        last_execution = data.get('lastExecution')
        owners = data.get('owners')
        return cls(
            id=_optional_str(data.get('id')) or "",
            name=_optional_str(data.get('name')),
            inputs=_reference_list(data, 'inputs'),
            outputs=_reference_list(data, 'outputs'),
            last_execution=(DataflowExecution.from_dict(last_execution)
                            if isinstance(last_execution, Mapping) else None),
            status=data.get('status'),
            run_state=data.get('runState'),
            enabled=data.get('enabled'),
            last_successful_execution=data.get('lastSuccessfulExecution'),
            execution_success_count=_optional_int(data.get('executionSuccessCount')),
            execution_count=data.get('executionCount'),
            success_rate=data.get('successRate'),
            owner=_optional_str(data.get('owner')),
            owners=([o for o in owners if isinstance(o, Mapping)]
                    if isinstance(owners, list) else []),
            last_updated=data.get('lastUpdated'),
            data_flow_type=_optional_str(data.get('dataFlowType')),
            description=data.get('description'),
            raw=dict(data),
        )

    @property
    def owner_name(self) -> Optional[str]:
        """Owner display name, falling back to the first owner record"""
        if self.owner:
            return self.owner
        if self.owners:
            return _optional_str(self.owners[0].get('displayName'))
        return None

    def __hash__(self):
        return hash(self.id)


@dataclass
class LineageNode:
    """
    A node in the lineage graph.

    Attributes:
        id: Identifier from the source system
        name: Display name
        node_type: DATASET or DATAFLOW
        metadata: Summary metadata (status, owner, ... for dataflows)
    """
    id: str
    name: str
    node_type: NodeType
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate and normalize node data"""
        if isinstance(self.node_type, str):
            self.node_type = NodeType(self.node_type)
        if not self.name:
            self.name = DEFAULT_NODE_NAME

    @property
    def is_dataset(self) -> bool:
        return self.node_type is NodeType.DATASET

    @property
    def is_dataflow(self) -> bool:
        return self.node_type is NodeType.DATAFLOW

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        data = asdict(self)
        data['node_type'] = self.node_type.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineageNode':
        """Create node from dictionary"""
        return cls(**data)


@dataclass(frozen=True)
class LineageEdge:
    """
    A directed edge between a dataset node and a dataflow node.

    Attributes:
        from_node: ID of the source node
        to_node: ID of the target node
        edge_type: INPUT (dataset -> dataflow) or OUTPUT (dataflow -> dataset)
    """
    from_node: str
    to_node: str
    edge_type: EdgeType

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {
            'from': self.from_node,
            'to': self.to_node,
            'type': self.edge_type.value,
        }


@dataclass
class LineageGraph:
    """
    Complete lineage graph.

    Nodes keep insertion order; edges keep insertion order and are not
    deduplicated.

    Attributes:
        nodes: Dictionary mapping node IDs to LineageNode objects
        edges: List of LineageEdge objects
        metadata: Graph-level metadata (skipped records, type conflicts)
    """
    nodes: Dict[str, LineageNode] = field(default_factory=dict)
    edges: List[LineageEdge] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_node(self, node_id: str) -> Optional[LineageNode]:
        """Get a node by ID"""
        return self.nodes.get(node_id)

    def get_edges_from(self, node_id: str,
                       edge_type: Optional[EdgeType] = None) -> List[LineageEdge]:
        """Get all edges originating from a node"""
        return [e for e in self.edges
                if e.from_node == node_id and (edge_type is None or e.edge_type is edge_type)]

    def get_edges_to(self, node_id: str,
                     edge_type: Optional[EdgeType] = None) -> List[LineageEdge]:
        """Get all edges pointing to a node"""
        return [e for e in self.edges
                if e.to_node == node_id and (edge_type is None or e.edge_type is edge_type)]

    def datasets(self) -> List[LineageNode]:
        """All dataset nodes in insertion order"""
        return [n for n in self.nodes.values() if n.is_dataset]

    def dataflows(self) -> List[LineageNode]:
        """All dataflow nodes in insertion order"""
        return [n for n in self.nodes.values() if n.is_dataflow]

    def connected_node_ids(self) -> Set[str]:
        """Ids of nodes with at least one incident edge"""
        connected = set()
        for edge in self.edges:
            connected.add(edge.from_node)
            connected.add(edge.to_node)
        return connected

    def count_edges(self, edge_type: EdgeType) -> int:
        return sum(1 for e in self.edges if e.edge_type is edge_type)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Convert to NetworkX directed multigraph"""
        G = nx.MultiDiGraph()

        for node_id, node in self.nodes.items():
            G.add_node(node_id, **node.to_dict())

        for edge in self.edges:
            G.add_edge(edge.from_node, edge.to_node, edge_type=edge.edge_type.value)

        return G

    def export_for_visualization(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Export nodes and links in the shape force-directed renderers expect.

        Returns:
            Dictionary with ``nodes`` and ``links`` lists
        """
        return {
            'nodes': [node.to_dict() for node in self.nodes.values()],
            'links': [
                {'source': e.from_node, 'target': e.to_node, 'type': e.edge_type.value}
                for e in self.edges
            ],
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return {
            'nodes': {nid: node.to_dict() for nid, node in self.nodes.items()},
            'edges': [edge.to_dict() for edge in self.edges],
            'metadata': self.metadata,
        }

    def __len__(self) -> int:
        """Return number of nodes"""
        return len(self.nodes)

    def __contains__(self, node_id: str) -> bool:
        """Check if node exists in graph"""
        return node_id in self.nodes


@dataclass(frozen=True)
class DatasetSummary:
    """Id and display name of a dataset."""
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name}


@dataclass
class DependencySide:
    """Dataflows and datasets on one side (upstream or downstream) of a dataset."""
    dataflows: List[Dataflow] = field(default_factory=list)
    datasets: List[DatasetSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'dataflows': [{'id': df.id, 'name': df.name} for df in self.dataflows],
            'datasets': [ds.to_dict() for ds in self.datasets],
        }


@dataclass
class DependencyRecord:
    """
    Upstream and downstream dependencies of a dataset.

    Attributes:
        dataset_id: The dataset analyzed
        dataset_name: Its display name
        upstream: Producing dataflows and the datasets feeding them
        downstream: Consuming dataflows and the datasets they produce
    """
    dataset_id: str
    dataset_name: str
    upstream: DependencySide = field(default_factory=DependencySide)
    downstream: DependencySide = field(default_factory=DependencySide)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'dataset_id': self.dataset_id,
            'dataset_name': self.dataset_name,
            'upstream': self.upstream.to_dict(),
            'downstream': self.downstream.to_dict(),
        }


@dataclass
class DataPath:
    """
    A directed path through the lineage graph.

    Attributes:
        nodes: Nodes along the path, source first
        edges: Edges traversed
        distance: Number of hops
    """
    nodes: List[LineageNode]
    edges: List[LineageEdge]
    distance: int

    @property
    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]


@dataclass
class LineageStatistics:
    """
    Graph-wide statistics.

    Attributes:
        total_dataflows: Number of dataflow records with an id
        total_datasets: Number of dataset nodes
        active_dataflows: Dataflows resolving to ACTIVE
        failed_dataflows: Dataflows resolving to FAILED
        running_dataflows: Dataflows resolving to RUNNING
        unknown_dataflows: Dataflows resolving to UNKNOWN
        orphaned_datasets: Dataset nodes without incident edges
        avg_inputs_per_dataflow: Input edges per dataflow
        avg_outputs_per_dataflow: Output edges per dataflow
    """
    total_dataflows: int = 0
    total_datasets: int = 0
    active_dataflows: int = 0
    failed_dataflows: int = 0
    running_dataflows: int = 0
    unknown_dataflows: int = 0
    orphaned_datasets: int = 0
    avg_inputs_per_dataflow: float = 0.0
    avg_outputs_per_dataflow: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation"""
        return asdict(self)


__all__ = [
    "DEFAULT_NODE_NAME",
    "DatasetReference",
    "DataflowExecution",
    "Dataflow",
    "LineageNode",
    "LineageEdge",
    "LineageGraph",
    "DatasetSummary",
    "DependencySide",
    "DependencyRecord",
    "DataPath",
    "LineageStatistics",
]
