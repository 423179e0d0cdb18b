# topmark:header:start
#
#   project      : ChainReaction
#   file         : failures.py
#   file_relpath : src/chain_reaction/core/failures.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Failure payloads carried by `Failure` outcomes.

A step author may put *any* displayable object in a `Failure`. `StepFailure` is
the library's own payload: a single tagged variant that wraps either a typed
exception or a display-only message, discriminated by `FailureKind`.

Example:
    ```python
    from chain_reaction import Failure, StepFailure

    def square(x: int):
        if x < 0:
            return Failure(StepFailure.invalid_input("Negative input for square function"))
        ...
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureKind(str, Enum):
    """Discriminator for `StepFailure` payloads.

    Attributes:
        INVALID_INPUT: The step rejected its input value.
        ARITHMETIC: A numeric operation could not be performed (e.g. division by zero).
        CUSTOM: A step-author-defined failure.
        EMPTY_SEQUENCE: ``merge`` was asked to fold an empty sequence.
        NOT_A_SEQUENCE: ``for_each``/``merge`` received a value that is not a sequence.
        EXCEPTION: The step raised an exception that the engine captured.
        CONTRACT: The step returned something other than an outcome.
    """

    INVALID_INPUT = "invalid_input"
    ARITHMETIC = "arithmetic"
    CUSTOM = "custom"
    EMPTY_SEQUENCE = "empty_sequence"
    NOT_A_SEQUENCE = "not_a_sequence"
    EXCEPTION = "exception"
    CONTRACT = "contract"

    @property
    def display_name(self) -> str:
        """Human-readable prefix used when displaying a failure."""
        return _TITLES[self]


_TITLES: dict[FailureKind, str] = {
    FailureKind.INVALID_INPUT: "Invalid input",
    FailureKind.ARITHMETIC: "Arithmetic error",
    FailureKind.CUSTOM: "Custom error",
    FailureKind.EMPTY_SEQUENCE: "Empty sequence",
    FailureKind.NOT_A_SEQUENCE: "Not a sequence",
    FailureKind.EXCEPTION: "Step raised",
    FailureKind.CONTRACT: "Step contract violated",
}


@dataclass(frozen=True)
class StepFailure:
    """Opaque, displayable failure payload.

    Attributes:
        kind (FailureKind): What went wrong.
        message (str): Display message.
        error (BaseException | None): The underlying exception, when there is one.
    """

    kind: FailureKind
    message: str
    error: BaseException | None = None

    def __str__(self) -> str:
        return f"{self.kind.display_name}: {self.message}"

    @property
    def is_empty_sequence(self) -> bool:
        """Whether this is the failure produced by folding an empty sequence."""
        return self.kind is FailureKind.EMPTY_SEQUENCE

    @classmethod
    def invalid_input(cls, message: str) -> StepFailure:
        """Build an ``INVALID_INPUT`` failure."""
        return cls(FailureKind.INVALID_INPUT, message)

    @classmethod
    def arithmetic(cls, message: str) -> StepFailure:
        """Build an ``ARITHMETIC`` failure."""
        return cls(FailureKind.ARITHMETIC, message)

    @classmethod
    def custom(cls, message: str) -> StepFailure:
        """Build a ``CUSTOM`` failure."""
        return cls(FailureKind.CUSTOM, message)

    @classmethod
    def empty_sequence(cls, label: str) -> StepFailure:
        """Build the ``EMPTY_SEQUENCE`` failure for the combinator ``label``."""
        return cls(FailureKind.EMPTY_SEQUENCE, f"{label} requires at least one item")

    @classmethod
    def not_a_sequence(cls, label: str, value: object) -> StepFailure:
        """Build the ``NOT_A_SEQUENCE`` failure for the combinator ``label``."""
        return cls(
            FailureKind.NOT_A_SEQUENCE,
            f"{label} requires a sequence, got {type(value).__name__}",
        )

    @classmethod
    def from_exception(cls, exc: BaseException, *, kind: FailureKind | None = None) -> StepFailure:
        """Wrap an exception raised by a step.

        Args:
            exc (BaseException): The exception to wrap.
            kind (FailureKind | None): Override the kind (default: ``EXCEPTION``).

        Returns:
            StepFailure: The wrapping failure; its message is ``"<ExcType>: <str(exc)>"``.
        """
        return cls(kind or FailureKind.EXCEPTION, f"{type(exc).__name__}: {exc}", exc)
