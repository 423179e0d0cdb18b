# topmark:header:start
#
#   project      : ChainReaction
#   file         : version.py
#   file_relpath : src/chain_reaction/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""``chain-reaction version``: print the installed Chain Reaction version."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from chain_reaction.cli.cmd_common import get_console, get_effective_verbosity
from chain_reaction.cli.options import OutputFormat, output_format_option
from chain_reaction.constants import CHAIN_REACTION_VERSION

if TYPE_CHECKING:
    from chain_reaction.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of Chain Reaction.",
)
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of Chain Reaction.

    Args:
        output_format (OutputFormat | None): Optional output format (text or json).
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    if fmt is OutputFormat.JSON:
        console.print(json.dumps({"version": CHAIN_REACTION_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("Chain Reaction version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(CHAIN_REACTION_VERSION, bold=True)}")
    else:
        console.print(console.styled(CHAIN_REACTION_VERSION, bold=True))
