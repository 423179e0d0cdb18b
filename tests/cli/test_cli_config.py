# topmark:header:start
#
#   project      : ChainReaction
#   file         : test_cli_config.py
#   file_relpath : tests/cli/test_cli_config.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""CLI tests: ``config`` prints the effective configuration as TOML."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chain_reaction.config.io import parse_toml_text
from tests.cli.conftest import assert_CONFIG_ERROR, assert_SUCCESS, run_cli_in
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path


@mark_cli
def test_config_prints_defaults(tmp_path: Path) -> None:
    """Without config files the defaults are printed (no ``log_level``)."""
    result = run_cli_in(tmp_path, ["config"])
    assert_SUCCESS(result)
    assert parse_toml_text(result.stdout) == {
        "strict_types": True,
        "exception_policy": "capture",
        "time_unit": "us",
        "precision": 3,
    }


@mark_cli
def test_config_merges_discovered_and_explicit_files(tmp_path: Path) -> None:
    """pyproject.toml < chain-reaction.toml < group --config < command --config."""
    (tmp_path / "pyproject.toml").write_text(
        '[tool.chain_reaction]\nexception_policy = "propagate"\nprecision = 1\n',
        encoding="utf-8",
    )
    (tmp_path / "chain-reaction.toml").write_text("precision = 2\n", encoding="utf-8")
    group_cfg = tmp_path / "group.toml"
    group_cfg.write_text('time_unit = "s"\nprecision = 4\n', encoding="utf-8")
    cmd_cfg = tmp_path / "cmd.toml"
    cmd_cfg.write_text("precision = 5\n", encoding="utf-8")

    result = run_cli_in(tmp_path, ["--config", str(group_cfg), "config"])
    assert_SUCCESS(result)
    data = parse_toml_text(result.stdout)
    assert data["exception_policy"] == "propagate"
    assert data["time_unit"] == "s"
    assert data["precision"] == 4

    result = run_cli_in(tmp_path, ["--config", str(group_cfg), "config", "--config", str(cmd_cfg)])
    assert_SUCCESS(result)
    assert parse_toml_text(result.stdout)["precision"] == 5


@mark_cli
def test_no_config_skips_discovery(tmp_path: Path) -> None:
    """``--no-config`` ignores files in the working directory."""
    (tmp_path / "chain-reaction.toml").write_text("precision = 9\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["--no-config", "config"])
    assert_SUCCESS(result)
    assert parse_toml_text(result.stdout)["precision"] == 3


@mark_cli
def test_verbose_config_lists_sources(tmp_path: Path) -> None:
    """``-v`` prefixes the TOML with a comment naming the merged files."""
    (tmp_path / "chain-reaction.toml").write_text("precision = 7\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["-v", "config"])
    assert_SUCCESS(result)
    assert result.stdout.startswith("# Sources: ")
    assert "chain-reaction.toml" in result.stdout.splitlines()[0]
    assert parse_toml_text(result.stdout)["precision"] == 7


@mark_cli
def test_malformed_toml_is_a_config_error(tmp_path: Path) -> None:
    """Malformed TOML aborts with CONFIG_ERROR."""
    (tmp_path / "chain-reaction.toml").write_text("precision = = 1\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["config"])
    assert_CONFIG_ERROR(result)
