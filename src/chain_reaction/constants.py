# topmark:header:start
#
#   project      : ChainReaction
#   file         : constants.py
#   file_relpath : src/chain_reaction/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Chain Reaction Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    CHAIN_REACTION_VERSION: str = get_version("chain-reaction")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    CHAIN_REACTION_VERSION = "0.0.0"

# Environment variable consulted for the runtime log level:
LOG_LEVEL_ENV_VAR: str = "CHAIN_REACTION_LOG_LEVEL"

# Configuration discovery:
CONFIG_FILE_NAME: str = "chain-reaction.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_SECTION: str = "tool.chain_reaction"

# Default labels used when a step carries none:
IF_ELSE_LABEL: str = "if_else"
FOR_EACH_LABEL: str = "for_each"
MERGE_LABEL: str = "merge"
