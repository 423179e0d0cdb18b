# topmark:header:start
#
#   project      : ChainReaction
#   file         : step.py
#   file_relpath : src/chain_reaction/pipeline/step.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Pipeline steps: fallible transformations from one value to an outcome.

A `Step` wraps a callable ``value -> Success | Failure`` together with an
optional label (used for timing attribution and diagnostics) and optional
declared input/output types (used to reject ill-typed pipelines while they are
being built).

The engine invokes steps through `Step.invoke`, which times the work on the
run's `Clock` and reports the label to record. Combinators override `invoke`
when a single record must describe more than one call (see
`chain_reaction.pipeline.combinators`).

Steps are usually created with the `step` decorator:

    ```python
    from chain_reaction import Failure, Outcome, StepFailure, Success, step

    @step
    def square(x: int) -> Outcome[int]:
        if x < 0:
            return Failure(StepFailure.invalid_input("Negative input for square function"))
        return Success(x * x)
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from chain_reaction.core.errors import StepContractError, TypeMismatchError
from chain_reaction.core.outcome import Success, is_outcome
from chain_reaction.pipeline.types import declared_types, is_compatible

if TYPE_CHECKING:
    from collections.abc import Callable

    from chain_reaction.core.outcome import Outcome
    from chain_reaction.pipeline.timing import Clock

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741
O2 = TypeVar("O2")


@dataclass(frozen=True, slots=True)
class Invocation:
    """What one timed step call produced.

    Attributes:
        outcome (Outcome[Any]): The step's result.
        duration_ns (int): Time attributed to the call.
        label (str): Label to record for the call.
    """

    outcome: Outcome[Any]
    duration_ns: int
    label: str


def callable_name(fn: Any) -> str:
    """Return a readable name for ``fn`` (function name, class name, or ``repr``)."""
    name: Any = getattr(fn, "__name__", None)
    if isinstance(name, str):
        return name
    return type(fn).__name__


class Step(Generic[I, O]):
    """A single labelled unit of work.

    Args:
        fn (Callable[[I], Outcome[O]]): The transformation; must return
            `Success` or `Failure`.
        label (str | None): Label used in timing records (default: the callable's name).
        input_type (Any): Declared input type, or ``None`` when unknown.
        output_type (Any): Declared output type, or ``None`` when unknown.
    """

    def __init__(
        self,
        fn: Callable[[I], Outcome[O]],
        *,
        label: str | None = None,
        input_type: Any = None,
        output_type: Any = None,
    ) -> None:
        self._fn = fn
        self._label = label
        self.input_type: Any = input_type
        self.output_type: Any = output_type

    @property
    def label(self) -> str:
        """Label attributed to this step in timing records."""
        return self._label or callable_name(self._fn)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r})"

    def with_label(self, label: str) -> Step[I, O]:
        """Return a copy of this step carrying ``label``."""
        clone: Step[I, O] = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        clone._label = label
        # Combinators wrap one of their own methods; rebind it to the copy.
        if getattr(self._fn, "__self__", None) is self:
            clone._fn = getattr(clone, self._fn.__name__)
        return clone

    def act(self, value: I) -> Outcome[O]:
        """Apply the step to ``value``.

        Raises:
            StepContractError: If the callable returns something other than an outcome.
        """
        result: Any = self._fn(value)
        if not is_outcome(result):
            raise StepContractError(self.label, result)
        return result

    def __call__(self, value: I) -> Outcome[O]:
        return self.act(value)

    def invoke(self, value: I, clock: Clock) -> Invocation:
        """Apply the step under ``clock`` and report what to record."""
        outcome, duration_ns = clock.time(self.act, value)
        return Invocation(outcome, duration_ns, self.label)

    def run(self, value: I) -> O:
        """Apply the step and return the success value.

        Raises:
            UnwrapError: If the step fails.
        """
        return self.act(value).unwrap()

    def then(self, other: Step[O, O2] | Callable[[O], Outcome[O2]]) -> ChainStep[I, O2]:
        """Compose this step with ``other`` into a single step.

        The composed step short-circuits like a pipeline but is timed and
        recorded as one unit.

        Raises:
            TypeMismatchError: If the declared types of the two steps are incompatible.
        """
        second: Step[O, O2] = as_step(other)
        if not is_compatible(self.output_type, second.input_type):
            raise TypeMismatchError(second.label, self.output_type, second.input_type)
        return ChainStep(self, second)


class ChainStep(Step[I, O]):
    """Two steps fused into one: ``first`` then ``second``, short-circuiting on failure."""

    def __init__(
        self,
        first: Step[I, Any],
        second: Step[Any, O],
        *,
        label: str | None = None,
    ) -> None:
        super().__init__(
            self._chain,
            label=label or f"{first.label} -> {second.label}",
            input_type=first.input_type,
            output_type=second.output_type,
        )
        self.first = first
        self.second = second

    def _chain(self, value: I) -> Outcome[O]:
        return self.first.act(value).and_then(self.second.act)


class MapStep(Step[I, O]):
    """An infallible step: the callable's return value is wrapped in `Success`."""

    def __init__(
        self,
        fn: Callable[[I], O],
        *,
        label: str | None = None,
        input_type: Any = None,
        output_type: Any = None,
    ) -> None:
        if input_type is None and output_type is None:
            input_type, output_type = declared_types(fn, wrap_success=True)
        super().__init__(
            self._lift,
            label=label or callable_name(fn),
            input_type=input_type,
            output_type=output_type,
        )
        self._map_fn = fn

    def _lift(self, value: I) -> Outcome[O]:
        return Success(self._map_fn(value))


def as_step(obj: Step[I, O] | Callable[[I], Outcome[O]], label: str | None = None) -> Step[I, O]:
    """Coerce ``obj`` into a `Step`.

    Args:
        obj (Step[I, O] | Callable[[I], Outcome[O]]): A step, or a callable
            returning an outcome (its annotations supply the declared types).
        label (str | None): Optional label override.

    Returns:
        Step[I, O]: The step.

    Raises:
        TypeError: If ``obj`` is neither a `Step` nor callable.
    """
    if isinstance(obj, Step):
        return obj.with_label(label) if label else obj
    if not callable(obj):
        raise TypeError(f"Expected a Step or a callable, got {type(obj).__name__}")
    input_type, output_type = declared_types(obj, wrap_success=False)
    return Step(obj, label=label, input_type=input_type, output_type=output_type)


@overload
def step(fn: Callable[[I], Outcome[O]], /) -> Step[I, O]: ...
@overload
def step(*, label: str | None = None) -> Callable[[Callable[[I], Outcome[O]]], Step[I, O]]: ...
def step(
    fn: Callable[[I], Outcome[O]] | None = None,
    /,
    *,
    label: str | None = None,
) -> Step[I, O] | Callable[[Callable[[I], Outcome[O]]], Step[I, O]]:
    """Turn a function returning an outcome into a `Step`.

    Usable bare (``@step``) or with arguments (``@step(label="square")``).
    Input and output types are read from the function's annotations.
    """

    def _wrap(f: Callable[[I], Outcome[O]]) -> Step[I, O]:
        return as_step(f, label)

    if fn is not None:
        return _wrap(fn)
    return _wrap
