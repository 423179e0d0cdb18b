# topmark:header:start
#
#   project      : ChainReaction
#   file         : __main__.py
#   file_relpath : src/chain_reaction/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Allow ``python -m chain_reaction``."""

from chain_reaction.cli.main import cli

if __name__ == "__main__":
    cli(prog_name="chain-reaction")
