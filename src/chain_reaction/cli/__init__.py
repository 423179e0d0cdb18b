# topmark:header:start
#
#   project      : ChainReaction
#   file         : __init__.py
#   file_relpath : src/chain_reaction/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Click-based command line interface for Chain Reaction."""
