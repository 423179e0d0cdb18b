# topmark:header:start
#
#   project      : ChainReaction
#   file         : io.py
#   file_relpath : src/chain_reaction/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""TOML I/O helpers for the configuration layer.

Parsing and rendering are done with `tomlkit`; parsed documents are returned
as plain ``dict`` structures so the model layer never deals with tomlkit
containers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from chain_reaction.config.logging import get_logger
from chain_reaction.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from chain_reaction.config.logging import ChainReactionLogger

TomlTable = dict[str, Any]

logger: ChainReactionLogger = get_logger(__name__)


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse a TOML document into a plain dict.

    Args:
        text (str): TOML document text.
        source (str): Name of the document, used in error messages.

    Returns:
        TomlTable: The parsed top-level table.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", source, e)
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``chain-reaction.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    return parse_toml_text(text, source=str(path))


def get_table(data: TomlTable, dotted: str) -> TomlTable | None:
    """Return the sub-table at the dotted path ``dotted`` (e.g. ``tool.chain_reaction``).

    Args:
        data (TomlTable): Top-level table.
        dotted (str): Dotted section path.

    Returns:
        TomlTable | None: The nested table, or ``None`` when any segment is
            missing or not a table.
    """
    node: Any = data
    for part in dotted.split("."):
        if not isinstance(node, Mapping):
            return None
        node = cast("Mapping[str, Any]", node).get(part)
    if isinstance(node, Mapping):
        return dict(cast("Mapping[str, Any]", node))
    return None


def _strip_none_for_toml(value: object) -> object:
    """Remove TOML-incompatible `None` from mappings (TOML has no `null`)."""
    if isinstance(value, Mapping):
        out: dict[str, object] = {}
        m: Mapping[object, object] = cast("Mapping[object, object]", value)
        for k_any, v_any in m.items():
            if v_any is None:
                logger.debug("Ignoring `None` entry in Mapping for key %s", k_any)
                continue
            out[str(k_any)] = _strip_none_for_toml(v_any)
        return out
    return value


def to_toml(data: TomlTable) -> str:
    """Render a plain dict as a TOML document.

    Args:
        data (TomlTable): The table to render. ``None`` values are omitted.

    Returns:
        str: The TOML text.
    """
    cleaned: Any = _strip_none_for_toml(data)
    return cast("str", cast("Any", tomlkit).dumps(cast("Mapping[str, Any]", cleaned)))
