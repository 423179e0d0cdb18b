# topmark:header:start
#
#   project      : ChainReaction
#   file         : demo.py
#   file_relpath : src/chain_reaction/demo.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Reference steps and the reference pipeline used by ``chain-reaction demo``.

Steps can do anything, as long as they return ``Success``/``Failure``:

    ```
    5 -> add(2) -> square() -> double() -> to_string()
    ```
"""

from __future__ import annotations

from chain_reaction.config.model import Config
from chain_reaction.core.failures import StepFailure
from chain_reaction.core.outcome import Failure, Outcome, Success
from chain_reaction.pipeline.builder import PipelineBuilder
from chain_reaction.pipeline.step import Step, step


def add(y: int) -> Step[int, int]:
    """Add ``y``."""

    @step(label=f"add({y})")
    def _add(x: int) -> Outcome[int]:
        return Success(x + y)

    return _add


def square() -> Step[int, int]:
    """Square a number; negative inputs are rejected."""

    @step(label="square")
    def _square(x: int) -> Outcome[int]:
        if x < 0:
            return Failure(StepFailure.invalid_input("Negative input for square function"))
        return Success(x * x)

    return _square


def double() -> Step[int, int]:
    """Double a number."""

    @step(label="double")
    def _double(x: int) -> Outcome[int]:
        return Success(x * 2)

    return _double


def to_string() -> Step[int, str]:
    """Convert a number to its decimal string."""

    @step(label="to_string")
    def _to_string(x: int) -> Outcome[str]:
        return Success(str(x))

    return _to_string


def divide(y: int) -> Step[int, int]:
    """Integer division by ``y``; division by zero is an arithmetic failure."""

    @step(label=f"divide({y})")
    def _divide(x: int) -> Outcome[int]:
        if y == 0:
            return Failure(StepFailure.arithmetic("Division by zero"))
        return Success(x // y)

    return _divide


def reference_pipeline(
    value: int,
    *,
    divide_by: int | None = None,
    config: Config | None = None,
) -> PipelineBuilder[str]:
    """Build ``value -> add(2) -> square -> double [-> divide(n)] -> to_string``."""
    builder = PipelineBuilder.input(value, config=config).then(add(2)).then(square()).then(double())
    if divide_by is not None:
        builder = builder.then(divide(divide_by))
    return builder.then(to_string())
