# topmark:header:start
#
#   project      : ChainReaction
#   file         : options.py
#   file_relpath : src/chain_reaction/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Common CLI options and parameter types.

This module centralizes reusable options (verbosity, color, config files,
output format) and their resolution logic, so commands and groups can stay
thin.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Generic, NoReturn, ParamSpec, TypeVar, cast

import click

from chain_reaction.cli.errors import ChainReactionUsageError

if TYPE_CHECKING:
    from collections.abc import Iterable

P = ParamSpec("P")
R = TypeVar("R")
E = TypeVar("E", bound=Enum)


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      TEXT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON object (machine-readable, never colored).
    """

    TEXT = "text"
    JSON = "json"


class EnumChoiceParam(click.ParamType, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum (case-insensitive)."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]
        self._fail_noreturn(
            f"Invalid choice: {value!r}. (choose from {', '.join(self.choices)})",
            param,
            ctx,
        )


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v``/``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` was passed.
        quiet_count (int): Number of times ``-q`` was passed.

    Returns:
        int: ``0`` by default, the ``-v`` count when verbose, or minus the
            ``-q`` count when quiet.

    Raises:
        ChainReactionUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ChainReactionUsageError(
            "The '--verbose' and '--quiet' options are mutually exclusive."
        )
    if verbose_count > 0:
        return min(verbose_count, 2)
    if quiet_count > 0:
        return -min(quiet_count, 2)
    return 0


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (mutually exclusive, countable)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output. Specify up to twice for even less.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-color``."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in program output.",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config PATH`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        type=click.Path(exists=True, dir_okay=False, resolve_path=True),
        help=(
            "Merge this TOML file after the discovered pyproject.toml / "
            "chain-reaction.toml. Repeatable; later files win."
        ),
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        default=False,
        help="Ignore config files in the working directory.",
    )(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--format`` with the `OutputFormat` choices."""
    f = click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
    return f
