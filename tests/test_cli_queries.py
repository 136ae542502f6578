from __future__ import annotations

import pytest
from typer.testing import CliRunner

from kdtreex import config as kx_config
from cli.queries.app import app


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch: pytest.MonkeyPatch):
    for key in ("KDTREEX_SELECTION", "KDTREEX_LOG_LEVEL", "KDTREEX_ENABLE_DIAGNOSTICS"):
        monkeypatch.setenv(key, "")
    kx_config.reset_runtime_config_cache()
    yield
    kx_config.reset_runtime_config_cache()


def test_cli_example_with_reference():
    runner = CliRunner()

    result = runner.invoke(app, ["--example", "-r", "9", "-r", "2"])

    assert result.exit_code == 0, result.output
    assert "K-D Tree Pretty Print:" in result.output
    assert "Brute-force search returned (8, 1) (squared distance 2)" in result.output
    assert "Pruned search returned (8, 1) (squared distance 2)" in result.output


def test_cli_prompts_for_reference():
    runner = CliRunner()

    result = runner.invoke(app, ["--example", "--hide-tree"], input="2\n3\n")

    assert result.exit_code == 0, result.output
    assert "K-D Tree Pretty Print:" not in result.output
    assert "Dimension 1" in result.output
    assert "Pruned search returned (2, 3) (squared distance 0)" in result.output


def test_cli_random_points():
    runner = CliRunner()

    result = runner.invoke(
        app,
        ["--points", "12", "--dims", "3", "--seed", "7", "-r", "0", "-r", "0.5", "-r", "-1"],
    )

    assert result.exit_code == 0, result.output
    assert "Generated points:" in result.output
    assert "In-order traversal:" in result.output
    assert "Searching for nearest neighbor of point (0.0, 0.5, -1.0)" in result.output


def test_cli_rejects_wrong_reference_length():
    runner = CliRunner()

    result = runner.invoke(app, ["--example", "-r", "1"])

    assert result.exit_code == 2


def test_cli_reports_invalid_selection():
    runner = CliRunner()

    result = runner.invoke(app, ["--example", "--selection", "bogus", "-r", "1", "-r", "1"])

    assert result.exit_code == 1


def test_cli_benchmark_runs_both_methods():
    runner = CliRunner()

    result = runner.invoke(
        app, ["benchmark", "--tree-points", "64", "--queries", "8", "--dims", "2"]
    )

    assert result.exit_code == 0, result.output
    assert "[pruned]" in result.output
    assert "[brute_force]" in result.output
