# topmark:header:start
#
#   project      : ChainReaction
#   file         : types.py
#   file_relpath : src/chain_reaction/pipeline/types.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Construction-time type rules for chaining steps.

Steps may declare the type they accept and the type they produce (the `step`
decorator reads them from annotations). While a pipeline is built, adjacent
declarations are compared with `is_compatible`; when either side is unknown the
link is accepted. The rules are deliberately shallow: classes are compared by
subclassing on their runtime origin (``list[int]`` → ``list``), unions are
expanded, and ``Any``/``object``/type variables accept everything.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Sequence
from typing import Any, TypeVar, Union, get_args, get_origin

from chain_reaction.core.outcome import Failure, Success

_UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)
TEXT_TYPES: tuple[type, ...] = (str, bytes, bytearray)
# Implicit numeric promotions accepted by type checkers: int -> float -> complex.
_NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {float: (int,), complex: (int, float)}


def _is_open(tp: Any) -> bool:
    return tp is None or tp is Any or tp is object or isinstance(tp, TypeVar)


def _union_args(tp: Any) -> tuple[Any, ...] | None:
    if get_origin(tp) in _UNION_ORIGINS:
        return get_args(tp)
    return None


def _runtime_class(tp: Any) -> type | None:
    origin: Any = get_origin(tp) or tp
    return origin if isinstance(origin, type) else None


def is_compatible(produced: Any, accepted: Any) -> bool:
    """Return whether a value of type ``produced`` may be fed to a step accepting ``accepted``.

    Args:
        produced (Any): Output type of the preceding step (``None`` when unknown).
        accepted (Any): Input type of the next step (``None`` when unknown).

    Returns:
        bool: ``False`` only when both types are known and provably incompatible.
    """
    if _is_open(produced) or _is_open(accepted):
        return True

    accepted_union = _union_args(accepted)
    if accepted_union is not None:
        return any(is_compatible(produced, a) for a in accepted_union)

    produced_union = _union_args(produced)
    if produced_union is not None:
        return all(is_compatible(p, accepted) for p in produced_union)

    produced_cls = _runtime_class(produced)
    accepted_cls = _runtime_class(accepted)
    if produced_cls is None or accepted_cls is None:
        return True
    if issubclass(produced_cls, _NUMERIC_PROMOTIONS.get(accepted_cls, ())):
        return True
    try:
        return issubclass(produced_cls, accepted_cls)
    except TypeError:
        # Protocols without @runtime_checkable and similar special forms.
        return True


def is_sequence_type(tp: Any) -> bool | None:
    """Return whether ``tp`` is a (non-text) sequence type; ``None`` when unknown."""
    if _is_open(tp):
        return None
    union = _union_args(tp)
    if union is not None:
        verdicts = [is_sequence_type(t) for t in union]
        if any(v is None for v in verdicts):
            return None
        return all(verdicts)
    cls = _runtime_class(tp)
    if cls is None:
        return None
    return issubclass(cls, Sequence) and not issubclass(cls, TEXT_TYPES)


def element_type(tp: Any) -> Any:
    """Return the element type of a sequence type (``list[int]`` → ``int``), or ``None``."""
    if _is_open(tp) or _union_args(tp) is not None:
        return None
    args = get_args(tp)
    if not args:
        return None
    if get_origin(tp) is tuple:
        # tuple[int, ...] is homogeneous; fixed-shape tuples are left unknown.
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    return args[0]


def success_type(tp: Any) -> Any:
    """Extract ``T`` from a ``Success[T]`` / ``Outcome[T]`` return annotation.

    Returns ``None`` when the annotation does not name a success type.
    """
    if _is_open(tp):
        return None
    if get_origin(tp) is Success:
        args = get_args(tp)
        return args[0] if args else None
    union = _union_args(tp)
    if union is not None:
        found = [success_type(t) for t in union if get_origin(t) is Success or t is Success]
        found = [t for t in found if t is not None]
        if len(found) == 1:
            return found[0]
    return None


def declared_types(fn: Any, *, wrap_success: bool) -> tuple[Any, Any]:
    """Read ``(input_type, output_type)`` from the annotations of ``fn``.

    Args:
        fn (Any): A callable taking one positional argument.
        wrap_success (bool): If True, the return annotation is the output type
            itself (infallible functions); otherwise it must be a ``Success[T]``
            or ``Outcome[T]`` and ``T`` is extracted.

    Returns:
        tuple[Any, Any]: The declared types, ``None`` where unknown.
    """
    try:
        hints: dict[str, Any] = typing.get_type_hints(fn)
    except (NameError, TypeError, AttributeError):
        # Unresolvable forward references or objects without annotations.
        return None, None

    ret: Any = hints.pop("return", None)
    try:
        params: list[inspect.Parameter] = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        params = []
    input_type: Any = hints.get(params[0].name) if params else None
    if wrap_success:
        output_type: Any = ret
    else:
        output_type = success_type(ret)
    if output_type is type(None) or output_type is Failure:
        output_type = None
    return input_type, output_type
