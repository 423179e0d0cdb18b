# topmark:header:start
#
#   project      : ChainReaction
#   file         : builder.py
#   file_relpath : src/chain_reaction/pipeline/builder.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Immutable pipeline description.

A `PipelineBuilder` holds an initial outcome and an ordered sequence of steps.
Building is purely descriptive: no step runs until `PipelineBuilder.run`.

Every chaining call returns a *new* builder. Steps are stored in a persistent
singly linked list whose nodes point at their predecessor, so a derived builder
shares the whole prefix with the builder it was derived from:

    ```python
    base = PipelineBuilder.input(5).then(add(1))
    doubled = base.then(double())  # base is unchanged
    squared = base.then(square())  # shares the add(1) node with `doubled`
    ```

Declared step types are checked while chaining (see
`chain_reaction.pipeline.types`); an incompatible link raises
`TypeMismatchError` immediately, never at run time.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from chain_reaction.config.model import Config
from chain_reaction.core.errors import TypeMismatchError
from chain_reaction.core.outcome import Success, to_outcome
from chain_reaction.pipeline.combinators import ForEachStep, IfElseStep, MergeStep
from chain_reaction.pipeline.reactor import Reactor
from chain_reaction.pipeline.step import MapStep, Step, as_step
from chain_reaction.pipeline.types import element_type, is_compatible, is_sequence_type

if TYPE_CHECKING:
    from collections.abc import Callable

    from chain_reaction.core.outcome import Outcome
    from chain_reaction.pipeline.reactor import RunResult
    from chain_reaction.pipeline.timing import Clock

V = TypeVar("V")
W = TypeVar("W")


@dataclass(frozen=True, slots=True)
class _StepNode:
    """One link of the persistent step list."""

    step: Step[Any, Any]
    parent: _StepNode | None
    length: int


class PipelineBuilder(Generic[V]):
    """Immutable, shareable description of a pipeline.

    Use `PipelineBuilder.input` (or `Reactor.input`) to create one.

    Args:
        initial (Outcome[Any]): The starting outcome.
        config (Config | None): Runtime configuration (default: `Config.defaults()`).
    """

    __slots__ = ("_config", "_initial", "_output_type", "_tail")

    def __init__(
        self,
        initial: Outcome[Any],
        *,
        config: Config | None = None,
        _tail: _StepNode | None = None,
        _output_type: Any = None,
    ) -> None:
        self._initial: Outcome[Any] = initial
        self._config: Config = config or Config.defaults()
        self._tail: _StepNode | None = _tail
        self._output_type: Any = _output_type

    @classmethod
    def input(cls, value: Any, *, config: Config | None = None) -> PipelineBuilder[Any]:
        """Start a pipeline from a raw value or from an existing outcome.

        A raw value becomes ``Success(value)``; a `Success`/`Failure` is used
        verbatim, so a pipeline may start from a prior failure.
        """
        initial: Outcome[Any] = to_outcome(value)
        output_type: Any = type(initial.value) if isinstance(initial, Success) else None
        return cls(initial, config=config, _output_type=output_type)

    # ------------------------------ Introspection ------------------------------

    @property
    def initial(self) -> Outcome[Any]:
        """The outcome the pipeline starts from."""
        return self._initial

    @property
    def config(self) -> Config:
        """Runtime configuration used by `run`."""
        return self._config

    @property
    def output_type(self) -> Any:
        """Statically known output type of the last step, or ``None``."""
        return self._output_type

    @property
    def steps(self) -> tuple[Step[Any, Any], ...]:
        """The step sequence, in execution order."""
        out: list[Step[Any, Any]] = []
        node: _StepNode | None = self._tail
        while node is not None:
            out.append(node.step)
            node = node.parent
        out.reverse()
        return tuple(out)

    def __len__(self) -> int:
        return 0 if self._tail is None else self._tail.length

    def __repr__(self) -> str:
        labels: str = ", ".join(s.label for s in self.steps)
        return f"PipelineBuilder(initial={self._initial!r}, steps=[{labels}])"

    # ------------------------------- Derivation --------------------------------

    def _derive(self, step: Step[Any, Any], output_type: Any) -> PipelineBuilder[Any]:
        node = _StepNode(step=step, parent=self._tail, length=len(self) + 1)
        return PipelineBuilder(
            self._initial,
            config=self._config,
            _tail=node,
            _output_type=output_type,
        )

    def _check_link(self, label: str, accepted: Any, produced: Any | None = None) -> None:
        if not self._config.strict_types:
            return
        produced = self._output_type if produced is None else produced
        if not is_compatible(produced, accepted):
            raise TypeMismatchError(label, produced, accepted)

    def _check_sequence(self, label: str) -> None:
        if self._config.strict_types and is_sequence_type(self._output_type) is False:
            raise TypeMismatchError(
                label, self._output_type, Sequence, "current value must be a sequence"
            )

    def with_input(self, value: Any) -> PipelineBuilder[Any]:
        """Return a builder with the same steps starting from ``value`` (or an outcome).

        Raises:
            TypeMismatchError: If the new input cannot be fed to the first step.
        """
        fresh: PipelineBuilder[Any] = PipelineBuilder.input(value, config=self._config)
        if self._tail is None:
            return fresh
        first: _StepNode = self._tail
        while first.parent is not None:
            first = first.parent
        fresh._check_link(first.step.label, first.step.input_type)
        return PipelineBuilder(
            fresh.initial,
            config=self._config,
            _tail=self._tail,
            _output_type=self._output_type,
        )

    def with_config(self, config: Config) -> PipelineBuilder[V]:
        """Return a builder with the same description and a different configuration."""
        return PipelineBuilder(
            self._initial,
            config=config,
            _tail=self._tail,
            _output_type=self._output_type,
        )

    # -------------------------------- Chaining ---------------------------------

    def then(
        self,
        step: Step[V, W] | Callable[[V], Outcome[W]],
        *,
        label: str | None = None,
    ) -> PipelineBuilder[W]:
        """Append a fallible step.

        Args:
            step (Step[V, W] | Callable[[V], Outcome[W]]): A `Step`, or a callable
                returning `Success`/`Failure`.
            label (str | None): Optional label override.

        Returns:
            PipelineBuilder[W]: The extended pipeline.

        Raises:
            TypeMismatchError: If the step's declared input type cannot accept
                the current output type.
        """
        s: Step[V, W] = as_step(step, label)
        self._check_link(s.label, s.input_type)
        return self._derive(s, s.output_type)

    def map(self, fn: Callable[[V], W], *, label: str | None = None) -> PipelineBuilder[W]:
        """Append an infallible step whose return value is wrapped in `Success`."""
        s: MapStep[V, W] = MapStep(fn, label=label)
        self._check_link(s.label, s.input_type)
        return self._derive(s, s.output_type)

    def if_else(
        self,
        predicate: Callable[[V], bool],
        then_step: Step[V, Any] | Callable[[V], Outcome[Any]],
        else_step: Step[V, Any] | Callable[[V], Outcome[Any]],
        *,
        tagged: bool = False,
        label: str | None = None,
    ) -> PipelineBuilder[Any]:
        """Append a conditional step that runs exactly one of two branches.

        Args:
            predicate (Callable[[V], bool]): Infallible condition on the current value.
            then_step (Step[V, Any] | Callable[[V], Outcome[Any]]): Run when true.
            else_step (Step[V, Any] | Callable[[V], Outcome[Any]]): Run when false.
            tagged (bool): Wrap the output in `Left` (then) or `Right` (else).
            label (str | None): Base label for the timing record.

        Returns:
            PipelineBuilder[Any]: The extended pipeline.
        """
        s = IfElseStep(predicate, then_step, else_step, tagged=tagged, label=label)
        self._check_link(s.then_step.label, s.then_step.input_type)
        self._check_link(s.else_step.label, s.else_step.input_type)
        return self._derive(s, s.output_type)

    def for_each(
        self,
        step: Step[Any, W] | Callable[[Any], Outcome[W]],
        *,
        label: str | None = None,
    ) -> PipelineBuilder[list[W]]:
        """Append a step applying ``step`` to each element of the current sequence.

        Stops at the first failing element (fail-fast, left to right).

        Raises:
            TypeMismatchError: If the current value is known not to be a sequence,
                or its element type is incompatible with ``step``.
        """
        s: ForEachStep[Any, W] = ForEachStep(step, label=label)
        self._check_sequence(s.label)
        item_type: Any = element_type(self._output_type)
        if item_type is not None:
            self._check_link(s.step.label, s.step.input_type, produced=item_type)
        return self._derive(s, s.output_type)

    def merge(
        self,
        combine: Callable[[Any, Any], Any],
        *,
        label: str | None = None,
    ) -> PipelineBuilder[Any]:
        """Append a left fold of the current (non-empty) sequence, seeded with its first element.

        Raises:
            TypeMismatchError: If the current value is known not to be a sequence.
        """
        s: MergeStep[Any] = MergeStep(combine, label=label)
        self._check_sequence(s.label)
        return self._derive(s, element_type(self._output_type))

    # -------------------------------- Execution --------------------------------

    def run(self, *, clock: Clock | None = None) -> RunResult[V]:
        """Execute the pipeline and return ``(outcome, timings)``.

        The builder is not modified and may be run again.

        Args:
            clock (Clock | None): Clock used for step timings (default: monotonic clock).

        Returns:
            RunResult[V]: The final outcome and the timing log.
        """
        reactor: Reactor[V] = Reactor(self.steps, self._initial, config=self._config, clock=clock)
        return reactor.execute()

    def run_value(self, *, clock: Clock | None = None) -> Outcome[V]:
        """Execute the pipeline and return only the final outcome."""
        return self.run(clock=clock).outcome

    @classmethod
    def from_steps(
        cls,
        value: Any,
        steps: Sequence[Step[Any, Any] | Callable[[Any], Outcome[Any]]],
        *,
        config: Config | None = None,
    ) -> PipelineBuilder[Any]:
        """Build a pipeline by chaining ``steps`` with `then`, in order."""
        builder: PipelineBuilder[Any] = cls.input(value, config=config)
        for s in steps:
            builder = builder.then(s)
        return builder
