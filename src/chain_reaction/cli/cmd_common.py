# topmark:header:start
#
#   project      : ChainReaction
#   file         : cmd_common.py
#   file_relpath : src/chain_reaction/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Helpers shared by the CLI subcommands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chain_reaction.config.model import Config

if TYPE_CHECKING:
    import click

    from chain_reaction.cli.console import ConsoleLike


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity set by the group (0 when unset)."""
    return int(ctx.obj.get("verbosity_level", 0))


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console installed on the context by the group."""
    return ctx.obj["console"]


def get_config(ctx: click.Context) -> Config:
    """Return the effective configuration resolved by the group."""
    config: Config | None = ctx.obj.get("config")
    return config if config is not None else Config.defaults()
