# topmark:header:start
#
#   project      : ChainReaction
#   file         : test_config_model.py
#   file_relpath : tests/config/test_config_model.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Tests for `Config`/`MutableConfig`: defaults, validation, discovery and merge order."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

import pytest

from chain_reaction.config.model import Config, ExceptionPolicy, MutableConfig, TimeUnit
from chain_reaction.core.errors import ConfigError
from tests.conftest import parametrize

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults() -> None:
    """Built-in defaults."""
    config = Config.defaults()
    assert config.strict_types is True
    assert config.exception_policy is ExceptionPolicy.CAPTURE
    assert config.time_unit is TimeUnit.US
    assert config.precision == 3
    assert config.log_level is None
    assert config.config_files == ()


def test_config_is_frozen_and_thaws() -> None:
    """A frozen config cannot be mutated; `thaw` yields an editable copy."""
    config = Config.defaults()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.precision = 1  # type: ignore[misc]

    draft = config.thaw()
    draft.precision = 1
    assert draft.freeze().precision == 1
    assert config.precision == 3


def test_unset_values_freeze_to_defaults() -> None:
    """`None` in a draft means "inherit the default"."""
    assert MutableConfig().freeze() == Config.defaults()


def test_from_toml_dict_parses_values() -> None:
    """Enum values are case-insensitive; log levels are normalised."""
    draft = MutableConfig.from_toml_dict(
        {
            "strict_types": False,
            "exception_policy": "PROPAGATE",
            "time_unit": "ms",
            "precision": 0,
            "log_level": "debug",
        }
    )
    config = draft.freeze()
    assert config.strict_types is False
    assert config.exception_policy is ExceptionPolicy.PROPAGATE
    assert config.time_unit is TimeUnit.MS
    assert config.precision == 0
    assert config.log_level == "DEBUG"


@parametrize(
    "data",
    [
        {"strict_types": "yes"},
        {"exception_policy": "ignore"},
        {"time_unit": "minutes"},
        {"precision": -1},
        {"precision": True},
        {"log_level": "LOUD"},
    ],
)
def test_from_toml_dict_rejects_invalid_values(data: dict[str, Any]) -> None:
    """Invalid values raise `ConfigError` naming the key."""
    key = next(iter(data))
    with pytest.raises(ConfigError, match=key):
        MutableConfig.from_toml_dict(data, source="test.toml")


def test_unknown_keys_are_ignored_with_a_warning(caplog: pytest.LogCaptureFixture) -> None:
    """Unknown keys do not fail the load."""
    caplog.set_level("WARNING", logger="chain_reaction")
    draft = MutableConfig.from_toml_dict({"colour": "blue", "precision": 2})
    assert draft.precision == 2
    assert any("colour" in r.getMessage() for r in caplog.records)


def test_merge_with_later_wins() -> None:
    """Values set in the later layer override earlier ones; unset values inherit."""
    base = MutableConfig(precision=1, time_unit=TimeUnit.MS)
    top = MutableConfig(precision=5)
    merged = base.merge_with(top)
    assert merged.precision == 5
    assert merged.time_unit is TimeUnit.MS

    falsy = base.merge_with(MutableConfig(strict_types=False, precision=0))
    assert falsy.strict_types is False
    assert falsy.precision == 0


def test_pyproject_without_section_is_skipped(tmp_path: Path) -> None:
    """A pyproject.toml without `[tool.chain_reaction]` contributes nothing."""
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "x"\n', encoding="utf-8")
    assert MutableConfig.from_toml_file(pyproject) is None


def test_load_merged_precedence(tmp_path: Path) -> None:
    """Defaults < pyproject.toml < chain-reaction.toml < explicit files."""
    (tmp_path / "pyproject.toml").write_text(
        '[tool.chain_reaction]\nprecision = 1\ntime_unit = "ms"\nstrict_types = false\n',
        encoding="utf-8",
    )
    (tmp_path / "chain-reaction.toml").write_text(
        'precision = 2\ntime_unit = "ns"\n', encoding="utf-8"
    )
    extra = tmp_path / "extra.toml"
    extra.write_text("precision = 4\n", encoding="utf-8")

    config = MutableConfig.load_merged(anchor=tmp_path, extra_config_files=[extra]).freeze()
    assert config.precision == 4
    assert config.time_unit is TimeUnit.NS
    assert config.strict_types is False
    assert config.config_files == (
        tmp_path / "pyproject.toml",
        tmp_path / "chain-reaction.toml",
        extra,
    )

    skipped = MutableConfig.load_merged(anchor=tmp_path, no_config=True).freeze()
    assert skipped == Config.defaults()


def test_to_toml_dict_round_trips_through_from_toml_dict() -> None:
    """The exported table is accepted back as input."""
    config = dataclasses.replace(Config.defaults(), precision=6, log_level="INFO")
    assert MutableConfig.from_toml_dict(config.to_toml_dict()).freeze() == config
