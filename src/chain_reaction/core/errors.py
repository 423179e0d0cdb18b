# topmark:header:start
#
#   project      : ChainReaction
#   file         : errors.py
#   file_relpath : src/chain_reaction/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Exceptions raised by the Chain Reaction library.

Step failures are *values* (see `chain_reaction.core.outcome.Failure`) and are
never raised by the engine. The exceptions below signal programming errors
instead: a pipeline that cannot be typed, a failure that was unwrapped as if it
were a success, or a step that broke its calling contract.
"""

from __future__ import annotations

from typing import Any


class ChainReactionError(Exception):
    """Base class for all Chain Reaction errors."""


class TypeMismatchError(ChainReactionError, TypeError):
    """A step's declared input type does not accept the previous output type.

    Raised while the pipeline is being built, never while it runs.

    Attributes:
        label (str): Label of the step being appended.
        produced (Any): The type produced by the preceding step (or the initial value).
        accepted (Any): The type the new step declares it accepts.
    """

    def __init__(self, label: str, produced: Any, accepted: Any, detail: str | None = None) -> None:
        self.label = label
        self.produced = produced
        self.accepted = accepted
        message = (
            f"Step {label!r} accepts {_type_name(accepted)} "
            f"but the pipeline produces {_type_name(produced)}"
        )
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnwrapError(ChainReactionError):
    """Raised when the value of a `Failure` outcome is requested.

    Attributes:
        error (Any): The failure payload that was found instead of a value.
    """

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f"Called unwrap() on a failure: {error}")


class StepContractError(ChainReactionError):
    """A step returned something other than a `Success` or `Failure`."""

    def __init__(self, label: str, returned: Any) -> None:
        self.label = label
        self.returned = returned
        super().__init__(
            f"Step {label!r} must return Success(...) or Failure(...), "
            f"got {type(returned).__name__}: {returned!r}"
        )


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    return repr(tp)


class ConfigError(ChainReactionError):
    """A configuration source is unreadable, malformed, or holds invalid values."""
