# topmark:header:start
#
#   project      : ChainReaction
#   file         : test_demo_steps.py
#   file_relpath : tests/pipeline/test_demo_steps.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Tests for the reference steps and the reference pipeline."""

from __future__ import annotations

from chain_reaction.core.failures import FailureKind
from chain_reaction.core.outcome import Failure, Success
from chain_reaction.demo import add, divide, double, reference_pipeline, square, to_string
from tests.conftest import parametrize


def test_reference_steps() -> None:
    """Each reference step does one thing."""
    assert add(2)(5) == Success(7)
    assert square()(7) == Success(49)
    assert double()(49) == Success(98)
    assert to_string()(98) == Success("98")
    assert divide(4)(98) == Success(24)


def test_failing_reference_steps() -> None:
    """Negative squares and division by zero fail with their own kinds."""
    negative = square()(-1)
    assert isinstance(negative, Failure)
    assert negative.error.kind is FailureKind.INVALID_INPUT

    by_zero = divide(0)(10)
    assert isinstance(by_zero, Failure)
    assert str(by_zero.error) == "Arithmetic error: Division by zero"


@parametrize(
    "value, divide_by, expected, steps",
    [
        (5, None, Success("98"), 4),
        (5, 7, Success("14"), 5),
    ],
)
def test_reference_pipeline(value: int, divide_by: int | None, expected: object, steps: int) -> None:
    """The reference pipeline optionally inserts a division before `to_string`."""
    pipeline = reference_pipeline(value, divide_by=divide_by)
    outcome, timings = pipeline.run()
    assert outcome == expected
    assert len(pipeline) == len(timings) == steps


def test_reference_pipeline_division_by_zero() -> None:
    """Dividing by zero halts before `to_string`."""
    outcome, timings = reference_pipeline(5, divide_by=0).run()
    assert isinstance(outcome, Failure)
    assert timings.labels() == ["add(2)", "square", "double", "divide(0)"]
