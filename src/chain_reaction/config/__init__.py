# topmark:header:start
#
#   project      : ChainReaction
#   file         : __init__.py
#   file_relpath : src/chain_reaction/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Configuration handling for Chain Reaction.

Exposes the immutable `Config` consumed by pipelines, the `MutableConfig`
builder used while discovering and merging TOML sources, and the enums for the
configurable behaviors.
"""

from __future__ import annotations

from chain_reaction.config.model import Config, ExceptionPolicy, MutableConfig, TimeUnit

__all__ = [
    "Config",
    "ExceptionPolicy",
    "MutableConfig",
    "TimeUnit",
]
