# topmark:header:start
#
#   project      : ChainReaction
#   file         : demo.py
#   file_relpath : src/chain_reaction/cli/commands/demo.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""``chain-reaction demo``: run the reference pipeline and print its timings.

The pipeline is ``VALUE -> add(2) -> square -> double [-> divide(N)] -> to_string``.
The command exits with `ExitCode.SUCCESS` when the pipeline ends in `Success`
and with `ExitCode.FAILURE` when it ends in `Failure`.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from chain_reaction.cli.cmd_common import get_config, get_console, get_effective_verbosity
from chain_reaction.cli.errors import ChainReactionPipelineError
from chain_reaction.cli.exit_codes import ExitCode
from chain_reaction.cli.options import EnumChoiceParam, OutputFormat, output_format_option
from chain_reaction.config.logging import get_logger
from chain_reaction.config.model import TimeUnit
from chain_reaction.core.errors import ChainReactionError
from chain_reaction.core.outcome import Success
from chain_reaction.demo import reference_pipeline

if TYPE_CHECKING:
    from chain_reaction.cli.console import ConsoleLike
    from chain_reaction.config.logging import ChainReactionLogger
    from chain_reaction.config.model import Config
    from chain_reaction.pipeline.builder import PipelineBuilder
    from chain_reaction.pipeline.reactor import RunResult

logger: ChainReactionLogger = get_logger(__name__)


def run_result_to_dict(result: RunResult[Any]) -> dict[str, Any]:
    """Return a JSON-ready mapping of a run result."""
    outcome = result.outcome
    return {
        "ok": result.ok,
        "value": outcome.value if isinstance(outcome, Success) else None,
        "error": None if isinstance(outcome, Success) else str(outcome.error),
        "timings": [
            {"index": r.index, "label": r.label, "duration_ns": r.duration_ns}
            for r in result.timings
        ],
        "total_ns": result.timings.total_ns,
    }


@click.command(
    name="demo",
    help="Run VALUE -> add(2) -> square -> double -> to_string and print the timings.",
)
@click.argument("value", type=int, default=5, required=False)
@click.option(
    "--divide-by",
    "divide_by",
    type=int,
    default=None,
    help="Insert an integer division by N after 'double' (0 fails the run).",
)
@click.option(
    "--unit",
    "unit",
    type=EnumChoiceParam(TimeUnit),
    default=None,
    help=f"Unit for durations ({', '.join(u.value for u in TimeUnit)}; default from config).",
)
@output_format_option
def demo_command(
    *,
    value: int = 5,
    divide_by: int | None = None,
    unit: TimeUnit | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Run the reference pipeline.

    Args:
        value (int): Initial value of the pipeline.
        divide_by (int | None): Optional divisor inserted after ``double``.
        unit (TimeUnit | None): Unit for rendered durations (overrides the config).
        output_format (OutputFormat | None): Output format (text or json).
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)
    config: Config = get_config(ctx)
    vlevel: int = get_effective_verbosity(ctx)

    try:
        builder: PipelineBuilder[str] = reference_pipeline(
            value, divide_by=divide_by, config=config
        )
        result: RunResult[str] = builder.run()
    except ChainReactionError as exc:
        raise ChainReactionPipelineError(str(exc)) from exc

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    if fmt is OutputFormat.JSON:
        console.print(json.dumps(run_result_to_dict(result)))
    else:
        if vlevel > 0:
            labels: str = " -> ".join(s.label for s in builder.steps)
            console.print(console.styled(f"Pipeline: {value} -> {labels}", bold=True))
        if vlevel >= 0:
            outcome = result.outcome
            if isinstance(outcome, Success):
                console.print(f"Result: {console.styled(str(outcome.value), fg='green')}")
            else:
                console.error(f"Failed: {outcome.error}")
            console.print()
            console.print(result.timings.render(unit or config.time_unit, config.precision))

    if not result.ok:
        logger.info("demo: pipeline ended in failure")
        ctx.exit(ExitCode.FAILURE)
