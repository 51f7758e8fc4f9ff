# tests/test_traversal.py

import pytest

from dataflow_lineage.core.config import TraversalConfig
from dataflow_lineage.core.enums import TraversalDirection
from dataflow_lineage.graph.builder import build_lineage_graph
from dataflow_lineage.graph.traversal import (
    clamp_depth,
    find_contributors,
    find_entity_contributors,
    trace_data_path,
)


@pytest.fixture
def long_chain_graph():
    """ds0 -> f0 -> ds1 -> f1 -> ... -> ds12"""
    return build_lineage_graph([
        {
            "id": f"f{i}",
            "inputs": [{"dataSourceId": f"ds{i}"}],
            "outputs": [{"dataSourceId": f"ds{i + 1}"}],
        }
        for i in range(12)
    ])


@pytest.mark.parametrize("requested, expected", [
    (0, 1), (-5, 1), (15, 10), (1, 1), (10, 10), (4, 4),
    ("7", 7), (None, 3), ("deep", 3),
    (float("inf"), 10), (float("-inf"), 1), (float("nan"), 3), (2.7, 2),
])
def test_clamp_depth(requested, expected):
    assert clamp_depth(requested) == expected


def test_clamp_depth_uses_config_default():
    assert clamp_depth(None, TraversalConfig(default_max_depth=5)) == 5


@pytest.mark.parametrize("requested, equivalent", [(0, 1), (-5, 1), (15, 10)])
def test_out_of_range_depth_behaves_like_clamped(long_chain_graph, requested, equivalent):
    for direction in TraversalDirection:
        assert (find_contributors(long_chain_graph, "ds12", direction, requested)
                == find_contributors(long_chain_graph, "ds12", direction, equivalent))


def test_upstream_depth_limit(chain_graph):
    assert find_contributors(chain_graph, "ds3", "upstream", 1) == {"ds3", "df2"}
    assert find_contributors(chain_graph, "ds3", "upstream", 2) == {"ds3", "df2", "ds2"}
    assert find_contributors(chain_graph, "ds3", "upstream", 10) == {"ds3", "df2", "ds2", "df1", "ds1"}


def test_downstream(chain_graph):
    assert find_contributors(chain_graph, "ds1", TraversalDirection.DOWNSTREAM, 2) == {"ds1", "df1", "ds2"}


def test_both_is_union_of_directions(chain_graph):
    both = find_contributors(chain_graph, "ds2", TraversalDirection.BOTH, 1)
    assert both == {"ds2", "df1", "df2"}


def test_ten_hop_ceiling(long_chain_graph):
    reached = find_contributors(long_chain_graph, "ds12", TraversalDirection.UPSTREAM, 100)
    assert len(reached) == 11
    assert "ds7" in reached
    assert "f6" not in reached


def test_cycle_terminates(cycle_graph):
    reached = find_contributors(cycle_graph, "ds_x", TraversalDirection.UPSTREAM, 10)
    assert reached == {"ds_x", "df_a", "ds_y", "df_b"}
    assert len(reached) <= len(cycle_graph.nodes)

    both = find_contributors(cycle_graph, "df_a", TraversalDirection.BOTH, 10)
    assert both == set(cycle_graph.nodes)


def test_unknown_seed_returns_empty(chain_graph):
    assert find_contributors(chain_graph, "missing") == set()
    assert find_entity_contributors(chain_graph, "missing") == set()


def test_entity_contributors_by_type(chain_graph):
    # datasets look upstream only
    assert find_entity_contributors(chain_graph, "ds2", 3) == {"ds2", "df1", "ds1"}
    # dataflows look both ways
    assert find_entity_contributors(chain_graph, "df1", 1) == {"df1", "ds1", "ds2"}


def test_trace_data_path(chain_graph):
    paths = trace_data_path(chain_graph, "ds1", "ds3")
    assert len(paths) == 1
    assert paths[0].node_ids == ["ds1", "df1", "ds2", "df2", "ds3"]
    assert paths[0].distance == 4
    assert len(paths[0].edges) == 4


def test_trace_data_path_shortest_first():
    graph = build_lineage_graph([
        {"id": "direct", "inputs": [{"dataSourceId": "a"}], "outputs": [{"dataSourceId": "z"}]},
        {"id": "first", "inputs": [{"dataSourceId": "a"}], "outputs": [{"dataSourceId": "m"}]},
        {"id": "second", "inputs": [{"dataSourceId": "m"}], "outputs": [{"dataSourceId": "z"}]},
    ])
    paths = trace_data_path(graph, "a", "z")
    assert [p.distance for p in paths] == [2, 4]
    assert paths[0].node_ids == ["a", "direct", "z"]


def test_trace_data_path_misses(chain_graph, cycle_graph):
    assert trace_data_path(chain_graph, "ds3", "ds1") == []
    assert trace_data_path(chain_graph, "ds1", "missing") == []
    assert len(trace_data_path(cycle_graph, "ds_x", "ds_y")) == 1


def test_trace_data_path_same_node(chain_graph):
    paths = trace_data_path(chain_graph, "ds1", "ds1")
    assert paths[0].node_ids == ["ds1"]
    assert paths[0].distance == 0


def test_infinite_depth_does_not_crash(chain_graph):
    reached = find_contributors(chain_graph, "ds3", TraversalDirection.UPSTREAM, float("inf"))
    assert reached == find_contributors(chain_graph, "ds3", TraversalDirection.UPSTREAM, 10)
