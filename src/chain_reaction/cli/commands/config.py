# topmark:header:start
#
#   project      : ChainReaction
#   file         : config.py
#   file_relpath : src/chain_reaction/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""``chain-reaction config``: print the effective configuration as TOML.

The output is a valid ``chain-reaction.toml``; keys without a value (such as an
unset ``log_level``) are omitted since TOML has no ``null``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from chain_reaction.cli.cmd_common import get_config, get_console, get_effective_verbosity
from chain_reaction.cli.config_resolver import resolve_config
from chain_reaction.config.io import to_toml

if TYPE_CHECKING:
    from chain_reaction.cli.console import ConsoleLike
    from chain_reaction.config.model import Config


@click.command(
    name="config",
    help="Print the effective configuration as TOML.",
)
@click.option(
    "--config",
    "config_paths",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Additional TOML file(s) merged after the group-level configuration.",
)
def config_command(*, config_paths: tuple[str, ...] = ()) -> None:
    """Print the effective configuration.

    Args:
        config_paths (tuple[str, ...]): Extra config files, merged after those
            given to the ``chain-reaction`` group.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)

    config: Config = get_config(ctx)
    if config_paths:
        config = resolve_config(
            config_paths=[*ctx.obj.get("config_paths", ()), *config_paths],
            no_config=bool(ctx.obj.get("no_config", False)),
        )

    if get_effective_verbosity(ctx) > 0:
        sources: str = ", ".join(str(p) for p in config.config_files) or "built-in defaults"
        console.print(f"# Sources: {sources}")
    console.print(to_toml(config.to_toml_dict()), nl=False)
