# topmark:header:start
#
#   project      : ChainReaction
#   file         : __init__.py
#   file_relpath : src/chain_reaction/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Core value types shared by the pipeline engine, the config layer and the CLI."""

from __future__ import annotations
