# tests/test_mermaid.py

from dataflow_lineage.core.config import DiagramConfig
from dataflow_lineage.core.data_structures import Dataflow
from dataflow_lineage.graph.builder import build_lineage_graph
from dataflow_lineage.visualization.mermaid import MermaidRenderer


def test_full_diagram_layout(chain_graph):
    lines = MermaidRenderer().generate_full_diagram(chain_graph).split("\n")

    assert lines[0] == "graph TD"
    assert lines[1:6] == [
        '    df1("Load Orders"):::dataflow',
        '    df2("Aggregate Orders"):::dataflow',
        '    ds1["Raw Orders"]:::dataset',
        '    ds2["Clean Orders"]:::dataset',
        '    ds3["Order Totals"]:::dataset',
    ]
    assert lines[6:10] == [
        "    ds1 --> df1",
        "    df1 ==> ds2",
        "    ds2 --> df2",
        "    df2 ==> ds3",
    ]
    assert lines[10] == ""
    assert lines[11].startswith("    classDef dataset ")
    assert lines[12].startswith("    classDef dataflow ")
    assert len(lines) == 13


def test_focused_diagram_highlights_seed(chain_graph):
    text = MermaidRenderer().generate_focused_diagram(chain_graph, "ds2", max_depth=2)

    assert '    ds2["Clean Orders"]:::dataset-highlight' in text
    assert '    ds1["Raw Orders"]:::dataset' in text
    assert "ds3" not in text
    assert "df2" not in text
    assert "classDef dataset-highlight" in text
    assert "classDef dataflow-highlight" in text


def test_focused_diagram_on_dataflow_goes_both_ways(chain_graph):
    text = MermaidRenderer().generate_focused_diagram(chain_graph, "df2", max_depth=1)

    assert '    df2("Aggregate Orders"):::dataflow-highlight' in text
    assert "    ds2 --> df2" in text
    assert "    df2 ==> ds3" in text
    assert "df1" not in text


def test_only_edges_inside_the_contributor_set(chain_graph):
    text = MermaidRenderer().generate_diagram(chain_graph, {"ds1", "df1", "df2"})
    assert "    ds1 --> df1" in text
    assert "ds2" not in text


def test_unknown_entity_gives_no_data_diagram(chain_graph):
    text = MermaidRenderer().generate_focused_diagram(chain_graph, "missing")
    assert text == "graph TD\n    NoData[No data found]"


def test_quotes_in_names_are_replaced():
    graph = build_lineage_graph([
        {"id": "df1", "name": 'The "best" flow', "inputs": [{"dataSourceId": "ds1", "name": 'say "hi"'}]},
    ])
    text = MermaidRenderer().generate_full_diagram(graph)
    assert "df1(\"The 'best' flow\"):::dataflow" in text
    assert "ds1[\"say 'hi'\"]:::dataset" in text


def test_cycle_diagram_terminates(cycle_graph):
    text = MermaidRenderer().generate_focused_diagram(cycle_graph, "ds_x", max_depth=10)
    assert text.count(":::") == 4


def test_overview_diagram_node_limit(chain_graph):
    text = MermaidRenderer(DiagramConfig(max_nodes=2)).generate_mermaid_diagram(chain_graph)
    assert "df1" in text and "df2" in text
    assert "ds1" not in text


def test_direction_is_configurable(chain_graph):
    text = MermaidRenderer(DiagramConfig(direction="LR")).generate_full_diagram(chain_graph)
    assert text.startswith("graph LR\n")


def test_single_dataflow_diagram(chain_dataflows):
    text = MermaidRenderer().generate_dataflow_diagram(Dataflow.from_dict(chain_dataflows[0]))
    lines = text.split("\n")

    assert lines[0] == "graph LR"
    assert '    input0["Raw Orders"]:::dataset' in lines
    assert "    input0 --> dataflow" in lines
    assert '    dataflow("Load Orders"):::dataflow' in lines
    assert "    dataflow --> output0" in lines
    assert '    output0["Clean Orders"]:::dataset' in lines


def test_numeric_names_render():
    graph = build_lineage_graph([
        {"id": "df1", "name": 2024, "outputs": [{"dataSourceId": "ds1", "name": 7}]},
    ])
    text = MermaidRenderer().generate_full_diagram(graph)
    assert '    df1("2024"):::dataflow' in text
    assert '    ds1["7"]:::dataset' in text
