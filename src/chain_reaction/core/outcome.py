# topmark:header:start
#
#   project      : ChainReaction
#   file         : outcome.py
#   file_relpath : src/chain_reaction/core/outcome.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Success/failure sum type threaded through a pipeline.

An `Outcome` is either `Success(value)` or `Failure(error)`. Both are frozen
dataclasses, so callers can inspect them with ``isinstance`` or with structural
pattern matching:

    ```python
    match outcome:
        case Success(value):
            ...
        case Failure(error):
            ...
    ```

`Left` and `Right` tag the branch taken by a tagged ``if_else``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar, Union

from chain_reaction.core.errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful outcome carrying ``value``."""

    value: T

    @property
    def is_success(self) -> Literal[True]:
        """Always ``True``."""
        return True

    @property
    def is_failure(self) -> Literal[False]:
        """Always ``False``."""
        return False

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value

    def unwrap_or(self, default: object) -> T:
        """Return the carried value (``default`` is ignored)."""
        return self.value

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        """Apply an infallible function to the carried value."""
        return Success(fn(self.value))

    def and_then(self, fn: Callable[[T], Outcome[U]]) -> Outcome[U]:
        """Apply a fallible function to the carried value."""
        return fn(self.value)


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A failed outcome carrying an opaque, displayable ``error`` payload."""

    error: E

    def __str__(self) -> str:
        return f"Failure({self.error})"

    @property
    def is_success(self) -> Literal[False]:
        """Always ``False``."""
        return False

    @property
    def is_failure(self) -> Literal[True]:
        """Always ``True``."""
        return True

    def unwrap(self) -> Any:
        """Raise `UnwrapError`: a failure carries no value.

        Raises:
            UnwrapError: Always, carrying the failure payload.
        """
        raise UnwrapError(self.error)

    def unwrap_or(self, default: U) -> U:
        """Return ``default``."""
        return default

    def map(self, fn: Callable[[Any], Any]) -> Failure[E]:
        """Return the failure unchanged."""
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> Failure[E]:
        """Return the failure unchanged."""
        return self


Outcome = Union[Success[T], Failure[Any]]


def is_outcome(obj: object) -> bool:
    """Return whether ``obj`` is a `Success` or a `Failure`."""
    return isinstance(obj, (Success, Failure))


def to_outcome(value_or_outcome: Any) -> Outcome[Any]:
    """Wrap a raw value in `Success`; pass existing outcomes through unchanged."""
    if is_outcome(value_or_outcome):
        return value_or_outcome
    return Success(value_or_outcome)


@dataclass(frozen=True)
class Left(Generic[T]):
    """Result of the *then* branch of a tagged ``if_else``."""

    value: T


@dataclass(frozen=True)
class Right(Generic[T]):
    """Result of the *else* branch of a tagged ``if_else``."""

    value: T


Either = Union[Left[T], Right[U]]
