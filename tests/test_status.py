# tests/test_status.py

import pytest

from dataflow_lineage.core.data_structures import Dataflow
from dataflow_lineage.core.enums import DataflowStatus
from dataflow_lineage.graph.builder import resolve_dataflow_status


def _status(**record):
    return resolve_dataflow_status(Dataflow.from_dict({"id": "df", **record}))


@pytest.mark.parametrize("state, expected", [
    ("SUCCESS", DataflowStatus.ACTIVE),
    ("FAILED", DataflowStatus.FAILED),
    ("RUNNING", DataflowStatus.RUNNING),
])
def test_last_execution_state(state, expected):
    assert _status(lastExecution={"state": state}) is expected


def test_last_execution_wins_over_status():
    assert _status(lastExecution={"state": "FAILED"}, status="ACTIVE") is DataflowStatus.FAILED


def test_last_execution_state_is_case_sensitive():
    assert _status(lastExecution={"state": "failed"}, status="running") is DataflowStatus.RUNNING


@pytest.mark.parametrize("status, expected", [
    ("active", DataflowStatus.ACTIVE),
    ("Success", DataflowStatus.ACTIVE),
    ("FAILED", DataflowStatus.FAILED),
    ("running", DataflowStatus.RUNNING),
])
def test_status_field_is_case_insensitive(status, expected):
    assert _status(status=status) is expected


def test_unrecognized_status_falls_through():
    assert _status(status="PAUSED", runState="DISABLED") is DataflowStatus.UNKNOWN


def test_run_state_and_enabled():
    assert _status(runState="ENABLED") is DataflowStatus.ACTIVE
    assert _status(enabled=True) is DataflowStatus.ACTIVE
    assert _status(runState="DISABLED") is DataflowStatus.UNKNOWN
    assert _status(enabled=False) is DataflowStatus.UNKNOWN


def test_success_history():
    assert _status(lastSuccessfulExecution="2024-01-01T00:00:00Z") is DataflowStatus.ACTIVE
    assert _status(executionSuccessCount=3) is DataflowStatus.ACTIVE


def test_no_signal_defaults_to_active():
    assert _status() is DataflowStatus.ACTIVE
    assert _status(executionSuccessCount=0) is DataflowStatus.ACTIVE
