# tests/test_cli.py

import json

import pytest

from dataflow_lineage import __version__
from dataflow_lineage.cli import create_parser, main


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: dataflow-lineage" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_diagram_entity_is_optional():
    parser = create_parser()
    assert parser.parse_args(["diagram", "snap.json"]).entity_id is None
    args = parser.parse_args(["diagram", "snap.json", "ds2", "--max-depth", "5"])
    assert (args.entity_id, args.max_depth) == ("ds2", "5")


def test_stats(snapshot_file, capsys):
    assert main(["stats", str(snapshot_file)]) == 0
    out = capsys.readouterr().out
    assert "Dataflows:            2" in out
    assert "Health score: 85/100 (Excellent)" in out


def test_stats_json(snapshot_file, capsys):
    assert main(["stats", str(snapshot_file), "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["statistics"]["failed_dataflows"] == 1
    assert data["health_score"] == 85


def test_deps(snapshot_file, capsys):
    assert main(["deps", str(snapshot_file), "ds2"]) == 0
    out = capsys.readouterr().out
    assert "Clean Orders (ds2)" in out
    assert "Load Orders (df1)" in out
    assert "Order Totals (ds3)" in out


def test_deps_json(snapshot_file, capsys):
    assert main(["deps", str(snapshot_file), "ds2", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["upstream"]["dataflows"] == [{"id": "df1", "name": "Load Orders"}]
    assert data["downstream"]["datasets"] == [{"id": "ds3", "name": "Order Totals"}]


def test_deps_unknown_dataset(snapshot_file, capsys):
    assert main(["deps", str(snapshot_file), "nope"]) == 1
    assert "not found" in capsys.readouterr().out


def test_diagram(snapshot_file, capsys):
    assert main(["diagram", str(snapshot_file), "ds2", "--max-depth", "1"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("graph TD")
    assert "df1 ==> ds2" in out
    assert "ds1" not in out


def test_full_diagram(snapshot_file, capsys):
    assert main(["diagram", str(snapshot_file)]) == 0
    assert capsys.readouterr().out.count(":::") == 5


def test_paths(snapshot_file, capsys):
    assert main(["paths", str(snapshot_file), "ds1", "ds3"]) == 0
    out = capsys.readouterr().out
    assert "(4 hops) Raw Orders -> Load Orders -> Clean Orders -> Aggregate Orders -> Order Totals" in out

    assert main(["paths", str(snapshot_file), "ds3", "ds1"]) == 1


def test_plot(snapshot_file, tmp_path, capsys):
    output = tmp_path / "lineage.png"
    assert main(["plot", str(snapshot_file), str(output), "--entity", "ds2"]) == 0
    assert output.exists()
    assert "✓ Lineage plot saved" in capsys.readouterr().out

    assert main(["plot", str(snapshot_file), str(output), "--entity", "nope"]) == 1


def test_config_file_is_applied(snapshot_file, tmp_path, capsys):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"diagram": {"direction": "LR"}}), encoding="utf-8")

    assert main(["--config", str(config_path), "diagram", str(snapshot_file)]) == 0
    assert capsys.readouterr().out.startswith("graph LR")


def test_missing_snapshot_is_an_error(tmp_path, capsys):
    assert main(["stats", str(tmp_path / "missing.json")]) == 1
    assert "✗ Error" in capsys.readouterr().err


def test_malformed_snapshot_is_an_error(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"rows": []}), encoding="utf-8")
    assert main(["stats", str(path)]) == 1
    assert "does not contain a list of dataflows" in capsys.readouterr().err


def test_bad_environment_is_an_error(snapshot_file, monkeypatch, capsys):
    monkeypatch.setenv("LINEAGE_MAX_DEPTH", "deep")
    assert main(["stats", str(snapshot_file)]) == 1
    assert "LINEAGE_MAX_DEPTH must be an integer" in capsys.readouterr().err
