# topmark:header:start
#
#   project      : ChainReaction
#   file         : reactor.py
#   file_relpath : src/chain_reaction/pipeline/reactor.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Execution engine: walk a step sequence against an initial outcome.

The `Reactor` is created by `PipelineBuilder.run` for exactly one run and then
discarded. It is a two-state machine:

- ``RUNNING``: the current outcome is a `Success`; the next step executes.
- ``HALTED``: the current outcome is a `Failure`; every remaining step is
  skipped (no clock, no timing record). ``HALTED`` is absorbing.

Failures are values: `Reactor.execute` always returns normally with the final
outcome and the timing log, which is a true partial record up to and including
the failing step.

Exceptions raised by a step (or a step returning something other than an
outcome) are handled according to `Config.exception_policy`: captured into a
`Failure` (default) or propagated to the caller.

This module never prints; it only logs.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, NamedTuple, TypeVar

from chain_reaction.config.logging import get_logger
from chain_reaction.config.model import Config, ExceptionPolicy
from chain_reaction.core.errors import StepContractError
from chain_reaction.core.failures import FailureKind, StepFailure
from chain_reaction.core.outcome import Failure, Success
from chain_reaction.pipeline.step import Invocation
from chain_reaction.pipeline.timing import Clock, TimingLog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chain_reaction.config.logging import ChainReactionLogger
    from chain_reaction.core.outcome import Outcome
    from chain_reaction.pipeline.builder import PipelineBuilder
    from chain_reaction.pipeline.step import Step

logger: ChainReactionLogger = get_logger(__name__)

V = TypeVar("V")


class ReactorState(str, Enum):
    """Execution state of a `Reactor`."""

    RUNNING = "running"
    HALTED = "halted"


class RunResult(NamedTuple, Generic[V]):
    """``(outcome, timings)`` pair returned by a run; unpacks like a tuple.

    Attributes:
        outcome (Outcome[V]): Final outcome.
        timings (TimingLog): One record per executed step, in execution order.
    """

    outcome: Outcome[V]
    timings: TimingLog

    @property
    def ok(self) -> bool:
        """Whether the run ended in `Success`."""
        return isinstance(self.outcome, Success)

    def unwrap(self) -> V:
        """Return the final value.

        Raises:
            UnwrapError: If the run ended in `Failure`.
        """
        return self.outcome.unwrap()


class Reactor(Generic[V]):
    """Transient execution context for one run.

    Args:
        steps (Sequence[Step[Any, Any]]): Steps to execute, in order.
        initial (Outcome[Any]): Starting outcome.
        config (Config | None): Runtime configuration (default: `Config.defaults()`).
        clock (Clock | None): Clock used for timings (default: monotonic clock).
    """

    def __init__(
        self,
        steps: Sequence[Step[Any, Any]],
        initial: Outcome[Any],
        *,
        config: Config | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.steps: tuple[Step[Any, Any], ...] = tuple(steps)
        self.outcome: Outcome[Any] = initial
        self.config: Config = config or Config.defaults()
        self.clock: Clock = clock or Clock()
        self.timings: TimingLog = TimingLog()

    @classmethod
    def input(cls, value: Any, *, config: Config | None = None) -> PipelineBuilder[Any]:
        """Start describing a pipeline from ``value`` (a raw value or an outcome)."""
        from chain_reaction.pipeline.builder import PipelineBuilder

        return PipelineBuilder.input(value, config=config)

    @property
    def state(self) -> ReactorState:
        """``RUNNING`` while the current outcome is a success, ``HALTED`` afterwards."""
        return ReactorState.HALTED if isinstance(self.outcome, Failure) else ReactorState.RUNNING

    def execute(self) -> RunResult[V]:
        """Run every step in order, short-circuiting on the first failure.

        Returns:
            RunResult[V]: The final outcome and the timing log.
        """
        logger.debug("Reactor: starting run of %d step(s) from %r", len(self.steps), self.outcome)

        for index, step in enumerate(self.steps):
            if self.state is ReactorState.HALTED:
                logger.trace("Reactor: skipping step %d (%s): halted", index, step.label)
                continue

            invocation: Invocation = self._invoke(index, step)
            self.timings.record(index, invocation.label, invocation.duration_ns)
            self.outcome = invocation.outcome
            logger.trace(
                "Reactor: step %d (%s) -> %s in %d ns",
                index,
                invocation.label,
                type(self.outcome).__name__,
                invocation.duration_ns,
            )
            if self.state is ReactorState.HALTED:
                logger.info(
                    "Reactor: ⚠️ Pipeline halted by step %d (%s): %s",
                    index,
                    invocation.label,
                    self.outcome.error,
                )

        logger.debug(
            "Reactor: run finished %s after %d executed step(s)",
            self.state.value,
            len(self.timings),
        )
        return RunResult(self.outcome, self.timings)

    def _invoke(self, index: int, step: Step[Any, Any]) -> Invocation:
        """Invoke ``step`` on the current value, applying the exception policy."""
        value: Any = self.outcome.unwrap()
        start: int = self.clock.now()
        try:
            return step.invoke(value, self.clock)
        except Exception as exc:
            if self.config.exception_policy is ExceptionPolicy.PROPAGATE:
                raise
            elapsed: int = max(0, self.clock.now() - start)
            kind: FailureKind = (
                FailureKind.CONTRACT if isinstance(exc, StepContractError) else FailureKind.EXCEPTION
            )
            logger.debug(
                "Reactor: step %d (%s) raised; captured as failure", index, step.label, exc_info=True
            )
            return Invocation(
                Failure(StepFailure.from_exception(exc, kind=kind)),
                elapsed,
                step.label,
            )
