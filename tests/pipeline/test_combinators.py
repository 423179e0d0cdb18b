# topmark:header:start
#
#   project      : ChainReaction
#   file         : test_combinators.py
#   file_relpath : tests/pipeline/test_combinators.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Unit tests for the `if_else`, `for_each` and `merge` combinators in isolation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from chain_reaction.core.failures import FailureKind, StepFailure
from chain_reaction.core.outcome import Failure, Left, Outcome, Right, Success
from chain_reaction.demo import double, square
from chain_reaction.pipeline.combinators import ForEachStep, IfElseStep, MergeStep, is_sequence
from tests.conftest import parametrize, ticking_clock


def is_even(x: int) -> bool:
    return x % 2 == 0


def test_is_sequence_excludes_text() -> None:
    """Lists and tuples are sequences; strings, bytes and sets are not."""
    assert is_sequence([1]) and is_sequence((1,))
    assert not is_sequence("ab")
    assert not is_sequence(b"ab")
    assert not is_sequence(bytearray(b"ab"))
    assert not is_sequence({1, 2})


@parametrize("value, expected, branch", [(4, 8, "then:double"), (5, 25, "else:square")])
def test_if_else_runs_exactly_one_branch(value: int, expected: int, branch: str) -> None:
    """The record is attributed to the branch taken."""
    calls: list[str] = []

    def spy(name: str, result: int) -> Any:
        def _spy(x: int) -> Outcome[int]:
            calls.append(name)
            return Success(result)

        return _spy

    combinator = IfElseStep(is_even, double(), square())
    invocation = combinator.invoke(value, ticking_clock())
    assert invocation.outcome == Success(expected)
    assert invocation.label == f"if_else[{branch}]"
    assert invocation.duration_ns == 1_000

    counted = IfElseStep(is_even, spy("then", 1), spy("else", 2))
    counted.act(value)
    assert calls == [branch.split(":")[0]]


def test_if_else_tagged_wraps_in_either() -> None:
    """Tagged branches report which side produced the value."""
    combinator = IfElseStep(is_even, double(), square(), tagged=True)
    assert combinator.act(4) == Success(Left(8))
    assert combinator.act(5) == Success(Right(25))
    assert combinator.output_type is None


def test_if_else_output_type_is_shared_or_unknown() -> None:
    """The declared output type survives only when both branches agree."""
    assert IfElseStep(is_even, double(), square()).output_type == int
    assert IfElseStep(is_even, double(), lambda x: Success(str(x))).output_type is None


def test_for_each_collects_in_order() -> None:
    """Each element is transformed; durations are summed into one record."""
    combinator: ForEachStep[int, int] = ForEachStep(square())
    invocation = combinator.invoke([1, 2, 3, 4], ticking_clock(100))
    assert invocation.outcome == Success([1, 4, 9, 16])
    assert invocation.label == "for_each(square)"
    assert invocation.duration_ns == 400


def test_for_each_is_fail_fast() -> None:
    """The first failing element ends the iteration."""
    seen: list[int] = []

    def checked(x: int) -> Outcome[int]:
        seen.append(x)
        if x < 0:
            return Failure(StepFailure.invalid_input(f"negative: {x}"))
        return Success(x)

    combinator: ForEachStep[int, int] = ForEachStep(checked)
    outcome = combinator.act([1, 2, -1, 4])
    assert outcome == Failure(StepFailure.invalid_input("negative: -1"))
    assert seen == [1, 2, -1]


def test_for_each_empty_and_non_sequence() -> None:
    """An empty sequence maps to an empty list; a scalar is rejected."""
    combinator: ForEachStep[int, int] = ForEachStep(square())
    assert combinator.act([]) == Success([])

    outcome = combinator.act(7)  # type: ignore[arg-type]
    assert isinstance(outcome, Failure)
    assert outcome.error.kind is FailureKind.NOT_A_SEQUENCE


def test_for_each_declares_sequence_types() -> None:
    """Declared types lift to sequences of the inner step's types."""
    combinator: ForEachStep[int, int] = ForEachStep(square())
    assert combinator.input_type == Sequence[int]
    assert combinator.output_type == list[int]


def add(a: int, b: int) -> int:
    return a + b


@parametrize(
    "items, expected",
    [([10, 20, 30, 40], 100), ((7,), 7), (["a", "b", "c"], "abc")],
)
def test_merge_folds_left_seeded_with_first(items: Sequence[Any], expected: Any) -> None:
    """The fold starts from the first element."""
    assert MergeStep(add).act(items) == Success(expected)


def test_merge_is_a_left_fold() -> None:
    """Non-associative combiners reveal the fold direction."""
    assert MergeStep(lambda acc, x: acc - x).act([10, 1, 2]) == Success(7)


def test_merge_rejects_empty_and_non_sequences() -> None:
    """Folding nothing is an `EMPTY_SEQUENCE` failure; the combiner never runs."""
    calls: list[Any] = []

    def spy(a: int, b: int) -> int:
        calls.append((a, b))
        return a + b

    combinator: MergeStep[int] = MergeStep(spy)
    outcome = combinator.act([])
    assert isinstance(outcome, Failure)
    assert outcome.error.is_empty_sequence
    assert str(outcome.error) == "Empty sequence: merge(spy) requires at least one item"
    assert calls == []

    scalar = combinator.act("abc")  # type: ignore[arg-type]
    assert isinstance(scalar, Failure)
    assert scalar.error.kind is FailureKind.NOT_A_SEQUENCE
