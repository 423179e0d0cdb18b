# topmark:header:start
#
#   project      : ChainReaction
#   file         : config_resolver.py
#   file_relpath : src/chain_reaction/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Resolve the effective `Config` from Click parameters.

Resolution order (lowest → highest precedence):
  1. Built-in defaults.
  2. Config files in the working directory, unless ``--no-config`` is set:
     ``pyproject.toml`` (``[tool.chain_reaction]``) first, then
     ``chain-reaction.toml``.
  3. Explicit config files passed via ``--config``, merged in order.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from chain_reaction.cli.errors import ChainReactionConfigError
from chain_reaction.config.logging import get_logger
from chain_reaction.config.model import MutableConfig
from chain_reaction.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chain_reaction.config.logging import ChainReactionLogger
    from chain_reaction.config.model import Config

logger: ChainReactionLogger = get_logger(__name__)


def resolve_config(
    *,
    config_paths: Iterable[str],
    no_config: bool,
    anchor: Path | None = None,
) -> Config:
    """Build the effective `Config` for a CLI invocation.

    Args:
        config_paths (Iterable[str]): Explicit config files, merged last and in order.
        no_config (bool): Skip discovery of config files in ``anchor``.
        anchor (Path | None): Directory searched for config files (default: CWD).

    Returns:
        Config: The frozen configuration.

    Raises:
        ChainReactionConfigError: If a config file cannot be read or holds
            invalid values.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            anchor=anchor,
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
    except ConfigError as exc:
        raise ChainReactionConfigError(str(exc)) from exc

    config: Config = draft.freeze()
    logger.debug("Effective config from %d file(s): %r", len(config.config_files), config)
    return config
