# tests/test_cli.py
"""
Tests for the blockmodel command-line interface (CLI).

Scope
-----
1.  **Command Registration**: `--help` lists `info`, `block` and `deps`.
2.  **Argument Validation**: Typer's `exists=True` check on the CSV path.
3.  **Rendering**: each command prints the expected facts for a small model.
4.  **Error Handling**: load and index errors exit with code 1, not 2.

We use `typer.testing.CliRunner` to invoke the app in-process.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from blockmodel.cli import app

CUBE = """x,y,z,x_size,y_size,z_size,grade
0,0,0,1,1,1,0.5
1,0,0,1,1,1,0.7
0,1,0,1,1,1,0.9
1,1,0,1,1,1,1.1
0,0,1,1,1,1,1.3
1,0,1,1,1,1,1.5
1,1,1,1,1,1,1.9
"""


@pytest.fixture  # type: ignore[misc]
def runner() -> CliRunner:
    """Create a fresh CliRunner for each test."""
    return CliRunner()


@pytest.fixture
def cube_csv(tmp_path: Path) -> Path:
    """A 2x2x2 cube with cell (0, 1, 1) missing."""
    path = tmp_path / "cube.csv"
    path.write_text(CUBE, encoding="utf-8")
    return path


def test_cli_help_shows_usage(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0, f"Help failed: {result.output}"
    for cmd in ("info", "block", "deps"):
        assert cmd in result.output


def test_info_fails_on_missing_file(runner: CliRunner) -> None:
    result = runner.invoke(app, ["info", "ghost.csv"])
    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_info_summarizes_model(runner: CliRunner, cube_csv: Path) -> None:
    result = runner.invoke(app, ["info", str(cube_csv)])
    assert result.exit_code == 0, f"CLI Failed with Output:\n{result.output}"
    assert "2 x 2 x 2" in result.output
    assert "Occupied" in result.output and "7" in result.output


def test_block_shows_payload_and_absent(runner: CliRunner, cube_csv: Path) -> None:
    result = runner.invoke(app, ["block", str(cube_csv), "1", "1", "1"])
    assert result.exit_code == 0, result.output
    assert "1.9" in result.output

    result = runner.invoke(app, ["block", str(cube_csv), "0", "1", "1"])
    assert result.exit_code == 0, result.output
    assert "absent" in result.output


def test_block_out_of_range_exits_1(runner: CliRunner, cube_csv: Path) -> None:
    result = runner.invoke(app, ["block", str(cube_csv), "0", "0", "2"])
    assert result.exit_code == 1, result.output
    assert "Index Error" in result.output


def test_deps_counts_per_strategy(runner: CliRunner, cube_csv: Path) -> None:
    result = runner.invoke(app, ["deps", str(cube_csv), "0", "0", "0", "--strategy", "preds"])
    assert result.exit_code == 0, result.output
    assert "4 indices" in result.output

    result = runner.invoke(app, ["deps", str(cube_csv), "0", "0", "0", "-s", "succs"])
    assert result.exit_code == 0, result.output
    assert "0 indices" in result.output

    # (0, 1, 1) is absent, so only three same-layer cells remain
    result = runner.invoke(app, ["deps", str(cube_csv), "1", "1", "1", "-s", "adj"])
    assert result.exit_code == 0, result.output
    assert "3 indices" in result.output


def test_deps_rejects_unknown_strategy(runner: CliRunner, cube_csv: Path) -> None:
    result = runner.invoke(app, ["deps", str(cube_csv), "0", "0", "0", "-s", "sideways"])
    assert result.exit_code == 2


def test_misaligned_csv_exits_1(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "bad.csv"
    path.write_text(CUBE.replace("1,1,1,1,1,1,1.9", "1,1,1.5,1,1,1,1.9"), encoding="utf-8")

    result = runner.invoke(app, ["info", str(path)])
    assert result.exit_code == 1, result.output
    assert "MisalignedCoordinateError" in result.output


def test_indexed_flag_reads_index_columns(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "indexed.csv"
    path.write_text(
        "x,y,z,x_size,y_size,z_size,i,j,k\n5,5,5,1,1,1,3,0,1\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["info", "--indexed", str(path)])
    assert result.exit_code == 0, result.output
    assert "4 x 1 x 2" in result.output
