# topmark:header:start
#
#   project      : ChainReaction
#   file         : main.py
#   file_relpath : src/chain_reaction/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Entry point of the ``chain-reaction`` command.

Group-level options are resolved once and placed into ``ctx.obj``:

- ``verbosity_level``: program-output verbosity (``-v``/``-q``).
- ``console``: the `ClickConsole` used for all user-facing output.
- ``config`` / ``config_paths`` / ``no_config``: the effective configuration
  and the parameters it was resolved from.

Internal logging is configured from ``CHAIN_REACTION_LOG_LEVEL`` or, when the
variable is unset, from the ``log_level`` configuration key.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chain_reaction.cli.commands.config import config_command
from chain_reaction.cli.commands.demo import demo_command
from chain_reaction.cli.commands.version import version_command
from chain_reaction.cli.config_resolver import resolve_config
from chain_reaction.cli.console import ClickConsole
from chain_reaction.cli.options import (
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_verbosity,
)
from chain_reaction.config.logging import (
    get_logger,
    parse_log_level,
    resolve_env_log_level,
    setup_logging,
)

if TYPE_CHECKING:
    from chain_reaction.cli.console import ConsoleLike
    from chain_reaction.config.logging import ChainReactionLogger
    from chain_reaction.config.model import Config

logger: ChainReactionLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Initialize shared state (verbosity, console, config, logging) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_paths (tuple[str, ...]): Explicit ``--config`` files.
        no_config (bool): Whether ``--no-config`` was passed.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    enable_color: bool = not no_color
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)

    ctx.obj["config_paths"] = config_paths
    ctx.obj["no_config"] = no_config
    config: Config = resolve_config(config_paths=config_paths, no_config=no_config)
    ctx.obj["config"] = config

    level: int | None = resolve_env_log_level()
    if level is None:
        level = parse_log_level(config.log_level)
    ctx.obj["log_level"] = level
    setup_logging(level=level)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Chain Reaction CLI: compose and time fallible pipelines.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Entry point for the Chain Reaction CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        config_paths=config_paths,
        no_config=no_config,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'chain-reaction demo [VALUE]' to run the reference pipeline.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(demo_command)

if __name__ == "__main__":
    cli()
