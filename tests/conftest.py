"""
Shared fixtures for the lineage tests.

Dataflow snapshots are raw dicts in the upstream camelCase shape, the same
form the CLI reads from disk.
"""

import json
import logging

import matplotlib
matplotlib.use("Agg")

import pytest

from dataflow_lineage.graph.builder import build_lineage_graph


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_logging so caplog sees records."""
    yield
    package_logger = logging.getLogger("dataflow_lineage")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def chain_dataflows():
    """ds1 -> df1 -> ds2 -> df2 -> ds3"""
    return [
        {
            "id": "df1",
            "name": "Load Orders",
            "inputs": [{"dataSourceId": "ds1", "name": "Raw Orders"}],
            "outputs": [{"dataSourceId": "ds2", "name": "Clean Orders"}],
            "lastExecution": {"state": "SUCCESS"},
            "owner": "alice",
        },
        {
            "id": "df2",
            "name": "Aggregate Orders",
            "inputs": [{"dataSourceId": "ds2", "name": "Clean Orders"}],
            "outputs": [{"dataSourceId": "ds3", "name": "Order Totals"}],
            "lastExecution": {"state": "FAILED"},
            "owners": [{"displayName": "bob"}],
        },
    ]


@pytest.fixture
def chain_graph(chain_dataflows):
    return build_lineage_graph(chain_dataflows)


@pytest.fixture
def cycle_dataflows():
    """df_a -> ds_x -> df_b -> ds_y -> df_a"""
    return [
        {
            "id": "df_a",
            "name": "A",
            "inputs": [{"dataSourceId": "ds_y", "name": "Y"}],
            "outputs": [{"dataSourceId": "ds_x", "name": "X"}],
        },
        {
            "id": "df_b",
            "name": "B",
            "inputs": [{"dataSourceId": "ds_x", "name": "X"}],
            "outputs": [{"dataSourceId": "ds_y", "name": "Y"}],
        },
    ]


@pytest.fixture
def cycle_graph(cycle_dataflows):
    return build_lineage_graph(cycle_dataflows)


@pytest.fixture
def isolated_dataflow():
    return {"id": "df_empty", "name": "Does Nothing", "inputs": [], "outputs": []}


@pytest.fixture
def snapshot_file(tmp_path, chain_dataflows):
    path = tmp_path / "dataflows.json"
    path.write_text(json.dumps({"dataflows": chain_dataflows}), encoding="utf-8")
    return path
