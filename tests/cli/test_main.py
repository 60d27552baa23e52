# tests/cli/test_main.py
"""
Unit tests for the k8s-resource Command-Line Interface (CLI).
"""

from unittest.mock import AsyncMock

import click
import pytest
import typer
from typer.testing import CliRunner

from k8s_resource import __version__
from k8s_resource.cli import app
from k8s_resource.core.config import config
from k8s_resource.core.exceptions import ClusterConnectionError
from k8s_resource.exporters.snapshot_exporter import SnapshotExporter
from k8s_resource.models.node import CollectionResult, CollectionStrategy

runner = CliRunner()


@pytest.fixture
def cluster(mocker, monkeypatch, tmp_path, make_collector, single_node_result):
    """
    Patches cluster access so the CLI runs against a canned one-node snapshot,
    writing its snapshot files to a temporary directory.
    """
    monkeypatch.setenv("COLUMNS", "200")
    monkeypatch.setattr(config, "SNAPSHOT_DIR", str(tmp_path))
    mocker.patch("k8s_resource.cli.main.require_k8s_config", new=AsyncMock())
    collector = make_collector(single_node_result)
    mocker.patch("k8s_resource.cli.main.MetricsCollector", return_value=collector)
    return collector


def snapshot_files(directory):
    return sorted(p.name for p in directory.glob("*.json"))


def test_help():
    result = runner.invoke(app, ["-h"])
    assert result.exit_code == 0
    assert "--overview" in result.output
    assert "--no-cleanup" in result.output


@pytest.mark.parametrize("flag", ["-v", "--version"])
def test_version(flag):
    result = runner.invoke(app, [flag])
    assert result.exit_code == 0
    assert f"k8s-resource version {__version__}" in result.output


def test_unrecognized_flag_exits_with_one():
    result = runner.invoke(app, ["--bogus"])
    assert result.exit_code == 1
    assert "--bogus" in result.output


def test_missing_cluster_configuration_exits_with_one(mocker):
    mocker.patch(
        "k8s_resource.cli.main.require_k8s_config",
        new=AsyncMock(side_effect=ClusterConnectionError("no kubeconfig")),
    )
    collector_class = mocker.patch("k8s_resource.cli.main.MetricsCollector")

    result = runner.invoke(app, ["--overview"])

    assert result.exit_code == 1
    assert "no kubeconfig" in result.output
    collector_class.assert_not_called()


def test_default_run_shows_everything_and_asks(cluster, tmp_path):
    result = runner.invoke(app, [], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Gathering cluster metrics..." in result.output
    assert "Cluster-wide Resource Overview" in result.output
    assert "50.00%" in result.output
    assert "CPU: OPTIMALLY provisioned" in result.output
    assert "Node Resource Availability" in result.output
    assert "Do you want to check if specific job resources are available?" in result.output
    assert "Checking capacity" not in result.output
    assert "Done. Temporary files removed." in result.output
    assert snapshot_files(tmp_path) == []
    assert cluster.closed is True


def test_confirmation_is_asked_again_until_answered(cluster):
    result = runner.invoke(app, ["--overview"], input="maybe\ny\n1\n4\n")

    assert result.exit_code == 0, result.output
    assert "Checking capacity for job requiring 1 CPU cores and 4 GB memory..." in result.output
    assert "n1" in result.output


def test_overview_only(cluster):
    result = runner.invoke(app, ["-o"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Cluster-wide Resource Overview" in result.output
    assert "Node Resource Availability" not in result.output


def test_nodes_only(cluster):
    result = runner.invoke(app, ["--nodes"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Node Resource Availability" in result.output
    assert "Cluster-wide Resource Overview" not in result.output


def test_last_section_flag_wins(cluster):
    result = runner.invoke(app, ["-o", "-n"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Node Resource Availability" in result.output
    assert "Cluster-wide Resource Overview" not in result.output


def test_job_flag_skips_confirmation_and_reprompts_bad_input(cluster):
    result = runner.invoke(app, ["-o", "--job"], input="abc\n-1\n1.5\n4\n")

    assert result.exit_code == 0, result.output
    assert "Do you want to check" not in result.output
    assert "'abc' is not a number." in result.output
    assert "'-1' must not be negative." in result.output
    assert "Checking capacity for job requiring 1.5 CPU cores and 4 GB memory..." in result.output
    assert "Nodes with sufficient resources" in result.output


def test_requirements_from_options(cluster):
    result = runner.invoke(app, ["-o", "--cpu", "4", "--memory", "16"])

    assert result.exit_code == 0, result.output
    assert "Enter required" not in result.output
    assert "No node has sufficient resources for this job." in result.output


def test_negative_requirement_option_is_a_usage_error(cluster):
    result = runner.invoke(app, ["--cpu", "-2", "--memory", "1"])
    assert result.exit_code == 1


def test_no_cleanup_keeps_snapshot_files(cluster, tmp_path):
    result = runner.invoke(app, ["-o", "--no-cleanup"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Done. Temporary files kept:" in result.output
    assert snapshot_files(tmp_path) == ["allocatable.json", "combined.json", "usage.json"]


def test_fallback_strategy_is_announced(mocker, monkeypatch, tmp_path, make_collector):
    monkeypatch.setattr(config, "SNAPSHOT_DIR", str(tmp_path))
    mocker.patch("k8s_resource.cli.main.require_k8s_config", new=AsyncMock())
    collector = make_collector(CollectionResult(strategy=CollectionStrategy.PER_NODE))
    mocker.patch("k8s_resource.cli.main.MetricsCollector", return_value=collector)

    result = runner.invoke(app, ["-o"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Using alternative data gathering method..." in result.output
    assert "0.00 cores" in result.output


def test_typer_runs_on_the_installed_click():
    """Usage errors and re-prompts rely on typer raising the click exceptions caught here."""
    assert typer.BadParameter is click.BadParameter
    assert issubclass(typer.BadParameter, click.UsageError)


def test_unwritable_snapshot_directory_still_reports(cluster, monkeypatch, tmp_path):
    not_a_directory = tmp_path / "snapshots"
    not_a_directory.write_text("", encoding="utf-8")
    monkeypatch.setattr(config, "SNAPSHOT_DIR", str(not_a_directory))

    result = runner.invoke(app, ["-o"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Cluster-wide Resource Overview" in result.output
    assert "50.00%" in result.output
    assert "Done. Temporary files removed." in result.output


def test_partially_written_snapshot_is_removed(cluster, monkeypatch, tmp_path):
    write_json = SnapshotExporter._write_json

    async def fail_on_allocatable(self, rows, filename):
        if filename == "allocatable.json":
            raise OSError(28, "No space left on device")
        return await write_json(self, rows, filename)

    monkeypatch.setattr(SnapshotExporter, "_write_json", fail_on_allocatable)

    result = runner.invoke(app, ["-o", "--no-cleanup"], input="n\n")

    assert result.exit_code == 0, result.output
    assert "Cluster-wide Resource Overview" in result.output
    assert snapshot_files(tmp_path) == []
