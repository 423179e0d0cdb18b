# topmark:header:start
#
#   project      : ChainReaction
#   file         : __init__.py
#   file_relpath : src/chain_reaction/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Subcommands of the ``chain-reaction`` CLI."""
