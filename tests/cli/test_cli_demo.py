# topmark:header:start
#
#   project      : ChainReaction
#   file         : test_cli_demo.py
#   file_relpath : tests/cli/test_cli_demo.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""CLI tests: ``demo`` output, formats and exit codes."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

from tests.cli.conftest import (
    assert_CONFIG_ERROR,
    assert_FAILURE,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli,
    run_cli_in,
)
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_demo_default_value(tmp_path: Path) -> None:
    """Without arguments the reference pipeline runs on 5 and prints "98"."""
    result = run_cli_in(tmp_path, ["--no-color", "demo"])
    assert_SUCCESS(result)
    assert "Result: 98" in result.output
    for label in ("add(2)", "square", "double", "to_string", "total"):
        assert label in result.output


@mark_cli
def test_demo_json_output(tmp_path: Path) -> None:
    """JSON output carries the value and one timing per executed step."""
    result = run_cli_in(tmp_path, ["demo", "3", "--divide-by", "4", "--format", "json"])
    assert_SUCCESS(result)

    payload: dict[str, Any] = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["value"] == "12"
    assert payload["error"] is None
    assert [t["label"] for t in payload["timings"]] == [
        "add(2)",
        "square",
        "double",
        "divide(4)",
        "to_string",
    ]
    assert [t["index"] for t in payload["timings"]] == [0, 1, 2, 3, 4]
    assert payload["total_ns"] == sum(t["duration_ns"] for t in payload["timings"])


@mark_cli
def test_demo_failure_exits_with_failure(tmp_path: Path) -> None:
    """A failing pipeline prints the reason and exits with FAILURE."""
    result = run_cli_in(tmp_path, ["--no-color", "demo", "--", "-10"])
    assert_FAILURE(result)
    assert "Invalid input: Negative input for square function" in result.output
    assert "double" not in result.output


@mark_cli
def test_demo_division_by_zero_json(tmp_path: Path) -> None:
    """Failures are reported in JSON too; later steps have no timing."""
    result = run_cli_in(tmp_path, ["demo", "--divide-by", "0", "--format", "json"])
    assert_FAILURE(result)
    payload: dict[str, Any] = json.loads(result.stdout)
    assert payload["ok"] is False
    assert payload["error"] == "Arithmetic error: Division by zero"
    assert payload["timings"][-1]["label"] == "divide(0)"


@mark_cli
def test_demo_unit_option(tmp_path: Path) -> None:
    """``--unit`` selects the rendering unit."""
    result = run_cli_in(tmp_path, ["--no-color", "demo", "--unit", "ns"])
    assert_SUCCESS(result)
    assert " ns" in result.output
    assert " us" not in result.output


@mark_cli
def test_demo_uses_configured_unit(tmp_path: Path) -> None:
    """The rendering unit and precision come from chain-reaction.toml."""
    (tmp_path / "chain-reaction.toml").write_text(
        'time_unit = "ms"\nprecision = 6\n', encoding="utf-8"
    )
    result = run_cli_in(tmp_path, ["--no-color", "demo"])
    assert_SUCCESS(result)
    assert " ms" in result.output
    assert re.search(r"\d+\.\d{6} ms", result.output)


@mark_cli
def test_demo_quiet_prints_nothing(tmp_path: Path) -> None:
    """``-q`` keeps only the exit code."""
    result = run_cli_in(tmp_path, ["-q", "demo"])
    assert_SUCCESS(result)
    assert result.output == ""


@mark_cli
def test_demo_verbose_shows_pipeline(tmp_path: Path) -> None:
    """``-v`` describes the pipeline before running it."""
    result = run_cli_in(tmp_path, ["--no-color", "-v", "demo", "1"])
    assert_SUCCESS(result)
    assert "Pipeline: 1 -> add(2) -> square -> double -> to_string" in result.output
    assert "Result: 18" in result.output


@mark_cli
def test_verbose_and_quiet_are_exclusive() -> None:
    """Combining ``-v`` and ``-q`` is a usage error."""
    result = run_cli(["-v", "-q", "--no-config", "demo"])
    assert_USAGE_ERROR(result)


@mark_cli
def test_invalid_config_is_a_config_error(tmp_path: Path) -> None:
    """An invalid config value aborts with CONFIG_ERROR."""
    (tmp_path / "chain-reaction.toml").write_text("precision = -1\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["demo"])
    assert_CONFIG_ERROR(result)
    assert "precision" in result.output


@mark_cli
def test_no_subcommand_prints_help() -> None:
    """The bare group prints a hint and the help text."""
    result = run_cli(["--no-color", "--no-config"])
    assert_SUCCESS(result)
    assert "chain-reaction demo" in result.output
    assert "Commands:" in result.output
