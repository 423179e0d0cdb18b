# topmark:header:start
#
#   project      : ChainReaction
#   file         : combinators.py
#   file_relpath : src/chain_reaction/pipeline/combinators.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Higher-order steps: conditional branch, map over a sequence, and fold.

Each combinator is a `Step` and therefore yields exactly one timing record per
pipeline position. They differ from plain steps in what that record says:

- `IfElseStep` runs one branch and records it as ``if_else[then:<label>]`` or
  ``if_else[else:<label>]``.
- `ForEachStep` records the *sum* of its per-element execution times; element
  timings are not retained individually.
- `MergeStep` is timed like any other step.

Sequence inputs must be finite and ordered (`collections.abc.Sequence`);
``str``/``bytes`` are not treated as sequences of characters.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from chain_reaction.config.logging import get_logger
from chain_reaction.constants import FOR_EACH_LABEL, IF_ELSE_LABEL, MERGE_LABEL
from chain_reaction.core.failures import StepFailure
from chain_reaction.core.outcome import Failure, Left, Right, Success
from chain_reaction.pipeline.step import Invocation, Step, as_step, callable_name
from chain_reaction.pipeline.types import TEXT_TYPES

if TYPE_CHECKING:
    from collections.abc import Callable

    from chain_reaction.config.logging import ChainReactionLogger
    from chain_reaction.core.outcome import Outcome
    from chain_reaction.pipeline.timing import Clock

logger: ChainReactionLogger = get_logger(__name__)

T = TypeVar("T")
O = TypeVar("O")  # noqa: E741


def is_sequence(value: object) -> bool:
    """Return whether ``value`` is a finite ordered (non-text) sequence."""
    return isinstance(value, Sequence) and not isinstance(value, TEXT_TYPES)


class IfElseStep(Step[T, Any]):
    """Evaluate ``predicate(value)`` and run exactly one of two branches.

    Args:
        predicate (Callable[[T], bool]): Plain, infallible condition.
        then_step (Step[T, Any]): Branch run when the predicate holds.
        else_step (Step[T, Any]): Branch run otherwise.
        tagged (bool): Wrap the branch output in `Left` (then) / `Right` (else).
        label (str | None): Base label (default: ``"if_else"``).
    """

    def __init__(
        self,
        predicate: Callable[[T], bool],
        then_step: Step[T, Any] | Callable[[T], Outcome[Any]],
        else_step: Step[T, Any] | Callable[[T], Outcome[Any]],
        *,
        tagged: bool = False,
        label: str | None = None,
    ) -> None:
        self.predicate = predicate
        self.then_step: Step[T, Any] = as_step(then_step)
        self.else_step: Step[T, Any] = as_step(else_step)
        self.tagged = tagged
        super().__init__(
            self._branch,
            label=label or IF_ELSE_LABEL,
            input_type=self.then_step.input_type or self.else_step.input_type,
            output_type=self._joined_output_type(),
        )

    def _joined_output_type(self) -> Any:
        if self.tagged:
            return None
        then_out: Any = self.then_step.output_type
        return then_out if then_out == self.else_step.output_type else None

    def select(self, value: T) -> tuple[str, Step[T, Any]]:
        """Return ``(branch_name, branch_step)`` for ``value``."""
        if self.predicate(value):
            return "then", self.then_step
        return "else", self.else_step

    def _tag(self, branch: str, outcome: Outcome[Any]) -> Outcome[Any]:
        if not self.tagged:
            return outcome
        wrapper: type[Left[Any]] | type[Right[Any]] = Left if branch == "then" else Right
        return outcome.map(wrapper)

    def _branch(self, value: T) -> Outcome[Any]:
        branch, chosen = self.select(value)
        return self._tag(branch, chosen.act(value))

    def invoke(self, value: T, clock: Clock) -> Invocation:
        """Run the selected branch; the record is attributed to that branch."""
        branch, chosen = self.select(value)
        logger.trace("%s: predicate selected the %s branch (%s)", self.label, branch, chosen.label)
        inner: Invocation = chosen.invoke(value, clock)
        return Invocation(
            self._tag(branch, inner.outcome),
            inner.duration_ns,
            f"{self.label}[{branch}:{inner.label}]",
        )


class ForEachStep(Step[Sequence[T], list[O]], Generic[T, O]):
    """Apply ``step`` to each element in order, collecting successes into a list.

    Fail-fast: the first failing element's failure becomes the result and the
    remaining elements are never evaluated.
    """

    def __init__(
        self,
        step: Step[T, O] | Callable[[T], Outcome[O]],
        *,
        label: str | None = None,
    ) -> None:
        self.step: Step[T, O] = as_step(step)
        super().__init__(
            self._each,
            label=label or f"{FOR_EACH_LABEL}({self.step.label})",
            input_type=None if self.step.input_type is None else Sequence[self.step.input_type],
            output_type=None if self.step.output_type is None else list[self.step.output_type],
        )

    def _apply(self, value: Any, clock: Clock | None) -> tuple[Outcome[list[O]], int]:
        if not is_sequence(value):
            return Failure(StepFailure.not_a_sequence(self.label, value)), 0
        collected: list[O] = []
        total_ns: int = 0
        for position, item in enumerate(value):
            if clock is None:
                outcome: Outcome[O] = self.step.act(item)
            else:
                inner: Invocation = self.step.invoke(item, clock)
                outcome = inner.outcome
                total_ns += inner.duration_ns
            if isinstance(outcome, Failure):
                logger.debug("%s: element %d failed: %s", self.label, position, outcome.error)
                return outcome, total_ns
            collected.append(outcome.value)
        return Success(collected), total_ns

    def _each(self, value: Sequence[T]) -> Outcome[list[O]]:
        return self._apply(value, None)[0]

    def invoke(self, value: Sequence[T], clock: Clock) -> Invocation:
        """Run over all elements; the duration is the sum of per-element times."""
        outcome, total_ns = self._apply(value, clock)
        return Invocation(outcome, total_ns, self.label)


class MergeStep(Step[Sequence[T], T]):
    """Left fold of a non-empty sequence, seeded with its first element.

    ``combine(accumulator, element)`` cannot fail. A single-element sequence
    yields that element; an empty sequence yields an ``EMPTY_SEQUENCE`` failure.
    """

    def __init__(self, combine: Callable[[T, T], T], *, label: str | None = None) -> None:
        self.combine = combine
        super().__init__(self._fold, label=label or f"{MERGE_LABEL}({callable_name(combine)})")

    def _fold(self, value: Sequence[T]) -> Outcome[T]:
        if not is_sequence(value):
            return Failure(StepFailure.not_a_sequence(self.label, value))
        if len(value) == 0:
            return Failure(StepFailure.empty_sequence(self.label))
        items = iter(value)
        acc: T = next(items)
        for item in items:
            acc = self.combine(acc, item)
        return Success(acc)
