"""Tests for the command line entry point."""

import pytest

from ybsnap.config.models import YbSnapConfig
from ybsnap.main import apply_overrides, build_parser, main


def test_parser_requires_an_action():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_lists():
    args = build_parser().parse_args(["--hosts", "a, b", "--ports", "7000,9000", "--adhoc-clocks"])
    assert args.hosts == ["a", "b"]
    assert args.ports == [7000, 9000]


def test_parser_rejects_bad_ports():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--ports", "7000,abc", "--snapshot"])


def test_overrides_take_precedence():
    args = build_parser().parse_args(["--hosts", "x", "--parallel", "8", "--log-level", "DEBUG", "--snapshot"])
    config = apply_overrides(YbSnapConfig(cluster={"hosts": ["a"], "ports": [9000]}), args)

    assert config.cluster.hosts == ["x"]
    assert config.cluster.ports == [9000]
    assert config.cluster.parallel == 8
    assert config.logging.level == "DEBUG"


def test_missing_config_file(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.yaml"), "--list-snapshots"]) == 1
    assert "not found" in capsys.readouterr().err


def test_invalid_parallel_override(capsys):
    assert main(["--parallel", "0", "--list-snapshots"]) == 1
    assert "configuration" in capsys.readouterr().err


def test_print_missing_snapshot_exits_nonzero(tmp_path, capsys):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"snapshots:\n  directory: {tmp_path / 'snaps'}\n")

    assert main(["--config", str(config_file), "--print-clocks", "3"]) == 1
    assert "no clocks data" in capsys.readouterr().err


def test_list_snapshots_empty(tmp_path, capsys):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"snapshots:\n  directory: {tmp_path / 'snaps'}\n")

    assert main(["--config", str(config_file), "--list-snapshots"]) == 0
    assert capsys.readouterr().out == ""


def test_malformed_snapshot_index_exits_nonzero(tmp_path, capsys):
    snaps = tmp_path / "snaps"
    snaps.mkdir()
    (snaps / "snapshots.json").write_text('[{"comment": "no number"}]')
    config_file = tmp_path / "config.yaml"
    config_file.write_text(f"snapshots:\n  directory: {snaps}\n")

    assert main(["--config", str(config_file), "--list-snapshots"]) == 1
    assert "Malformed snapshot index" in capsys.readouterr().err
