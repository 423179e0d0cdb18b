# topmark:header:start
#
#   project      : ChainReaction
#   file         : model.py
#   file_relpath : src/chain_reaction/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Configuration model: a mutable builder frozen into an immutable runtime `Config`.

`MutableConfig` collects settings from defaults, discovered project files and
explicit ``--config`` files. Unset fields are ``None`` (meaning *inherit*) so
that layers can be merged with a simple "later wins if set" rule. `freeze`
resolves the remaining ``None`` values to the defaults and returns a `Config`,
which is what the pipeline builder and the CLI consume.

Merge order (lowest → highest precedence):
    1) Built-in defaults
    2) ``[tool.chain_reaction]`` in ``pyproject.toml`` of the working directory
    3) ``chain-reaction.toml`` of the working directory
    4) Extra config files passed explicitly (in the order provided)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chain_reaction.config.io import get_table, load_toml_dict
from chain_reaction.config.logging import get_logger, parse_log_level
from chain_reaction.constants import CONFIG_FILE_NAME, PYPROJECT_FILE_NAME, PYPROJECT_SECTION
from chain_reaction.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chain_reaction.config.io import TomlTable
    from chain_reaction.config.logging import ChainReactionLogger

logger: ChainReactionLogger = get_logger(__name__)


class TimeUnit(str, Enum):
    """Unit used when rendering step durations."""

    NS = "ns"
    US = "us"
    MS = "ms"
    S = "s"

    @property
    def nanoseconds(self) -> int:
        """Number of nanoseconds in one unit."""
        return _NS_PER_UNIT[self]


_NS_PER_UNIT: dict[TimeUnit, int] = {
    TimeUnit.NS: 1,
    TimeUnit.US: 1_000,
    TimeUnit.MS: 1_000_000,
    TimeUnit.S: 1_000_000_000,
}


class ExceptionPolicy(str, Enum):
    """What the engine does when a step raises instead of returning an outcome.

    Attributes:
        CAPTURE: Convert the exception into a `Failure` and halt the run normally.
        PROPAGATE: Re-raise the exception to the caller of ``run()``.
    """

    CAPTURE = "capture"
    PROPAGATE = "propagate"


DEFAULT_STRICT_TYPES: bool = True
DEFAULT_EXCEPTION_POLICY: ExceptionPolicy = ExceptionPolicy.CAPTURE
DEFAULT_TIME_UNIT: TimeUnit = TimeUnit.US
DEFAULT_PRECISION: int = 3

KNOWN_KEYS: frozenset[str] = frozenset(
    {"strict_types", "exception_policy", "time_unit", "precision", "log_level"}
)


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        strict_types (bool): Reject incompatible declared step types while building.
        exception_policy (ExceptionPolicy): How exceptions raised by steps are handled.
        time_unit (TimeUnit): Unit used to render durations.
        precision (int): Number of decimals used to render durations.
        log_level (str | None): Log level name requested by the configuration.
        config_files (tuple[Path, ...]): Config sources merged into this snapshot.
    """

    strict_types: bool = DEFAULT_STRICT_TYPES
    exception_policy: ExceptionPolicy = DEFAULT_EXCEPTION_POLICY
    time_unit: TimeUnit = DEFAULT_TIME_UNIT
    precision: int = DEFAULT_PRECISION
    log_level: str | None = None
    config_files: tuple[Path, ...] = ()

    @classmethod
    def defaults(cls) -> Config:
        """Return the built-in default configuration."""
        return cls()

    def to_toml_dict(self) -> TomlTable:
        """Export the configuration as a TOML-ready table (``None`` values dropped later)."""
        return {
            "strict_types": self.strict_types,
            "exception_policy": self.exception_policy.value,
            "time_unit": self.time_unit.value,
            "precision": self.precision,
            "log_level": self.log_level,
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            strict_types=self.strict_types,
            exception_policy=self.exception_policy,
            time_unit=self.time_unit,
            precision=self.precision,
            log_level=self.log_level,
            config_files=list(self.config_files),
        )


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    ``None`` means *not set by this layer*.
    """

    strict_types: bool | None = None
    exception_policy: ExceptionPolicy | None = None
    time_unit: TimeUnit | None = None
    precision: int | None = None
    log_level: str | None = None

    # Provenance
    config_files: list[Path] = field(default_factory=lambda: [])

    def freeze(self) -> Config:
        """Resolve unset values to defaults and return an immutable `Config`."""
        return Config(
            strict_types=DEFAULT_STRICT_TYPES if self.strict_types is None else self.strict_types,
            exception_policy=self.exception_policy or DEFAULT_EXCEPTION_POLICY,
            time_unit=self.time_unit or DEFAULT_TIME_UNIT,
            precision=DEFAULT_PRECISION if self.precision is None else self.precision,
            log_level=self.log_level,
            config_files=tuple(self.config_files),
        )

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft holding the built-in defaults."""
        return Config.defaults().thaw()

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, source: str = "<dict>") -> MutableConfig:
        """Build a draft from a ``[tool.chain_reaction]``-shaped table.

        Args:
            data (TomlTable): The configuration table.
            source (str): Name of the source, used in messages.

        Returns:
            MutableConfig: The draft; keys absent from ``data`` stay unset.

        Raises:
            ConfigError: If a known key holds a value of the wrong type or an
                unknown enumeration value.
        """
        for key in sorted(set(data) - KNOWN_KEYS):
            logger.warning("Ignoring unknown config key %r in %s", key, source)

        draft = cls()
        if "strict_types" in data:
            value: Any = data["strict_types"]
            if not isinstance(value, bool):
                raise ConfigError(f"{source}: 'strict_types' must be a boolean, got {value!r}")
            draft.strict_types = value
        if "exception_policy" in data:
            draft.exception_policy = _enum_value(ExceptionPolicy, data, "exception_policy", source)
        if "time_unit" in data:
            draft.time_unit = _enum_value(TimeUnit, data, "time_unit", source)
        if "precision" in data:
            value = data["precision"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(
                    f"{source}: 'precision' must be a non-negative integer, got {value!r}"
                )
            draft.precision = value
        if "log_level" in data:
            value = data["log_level"]
            if not isinstance(value, str) or parse_log_level(value) is None:
                raise ConfigError(f"{source}: 'log_level' is not a known level: {value!r}")
            draft.log_level = value.upper()
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        ``pyproject.toml`` files contribute their ``[tool.chain_reaction]``
        table; any other file is read as a whole.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The draft, or ``None`` when a ``pyproject.toml``
                has no ``[tool.chain_reaction]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_FILE_NAME:
            section: TomlTable | None = get_table(toml_data, PYPROJECT_SECTION)
            if section is None:
                logger.debug("No [%s] section in %s", PYPROJECT_SECTION, path)
                return None
            toml_data = section

        draft: MutableConfig = cls.from_toml_dict(toml_data, source=str(path))
        draft.config_files = [path]
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return the config files present in ``start``, lowest precedence first."""
        found: list[Path] = []
        for name in (PYPROJECT_FILE_NAME, CONFIG_FILE_NAME):
            candidate: Path = start / name
            if candidate.is_file():
                found.append(candidate)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            anchor (Path | None): Directory searched for config files (default: CWD).
            extra_config_files (Iterable[Path] | None): Explicit files merged last, in order.
            no_config (bool): If True, skip discovery in ``anchor``.

        Returns:
            MutableConfig: The merged draft.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableConfig(
            strict_types=self.strict_types if other.strict_types is None else other.strict_types,
            exception_policy=other.exception_policy or self.exception_policy,
            time_unit=other.time_unit or self.time_unit,
            precision=self.precision if other.precision is None else other.precision,
            log_level=other.log_level or self.log_level,
            config_files=[*self.config_files, *other.config_files],
        )


def _enum_value(enum_cls: Any, data: TomlTable, key: str, source: str) -> Any:
    value: Any = data[key]
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"{source}: {key!r} must be one of {allowed}, got {value!r}") from None
