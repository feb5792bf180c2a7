"""
Value policy for deep writes.

Given the value currently stored at a path step, decides what replaces it.
Every decision is a lookup in a table keyed by (mode, shape, is_final), so
the policy stays exhaustive and can be checked row by row.

Shapes:
- ABSENT: nothing stored at this key
- SCALAR: any present value that is not a container or sequence (None too)
- SEQUENCE: list or tuple
- CONTAINER: any Mapping
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

import nestmap.types as types


class Shape(_enum.Enum):
    """Closed set of value shapes the policy distinguishes."""

    ABSENT = "absent"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    CONTAINER = "container"


def classify(value: _typing.Any) -> Shape:
    """
    Classify a value into a Shape.

    str, bytes and bytearray are scalars, not sequences.

    Example:
        >>> classify({"a": 1})
        <Shape.CONTAINER: 'container'>
        >>> classify(["a"])
        <Shape.SEQUENCE: 'sequence'>
        >>> classify("a")
        <Shape.SCALAR: 'scalar'>
    """
    if value is types.ABSENT:
        return Shape.ABSENT
    if isinstance(value, _abc.Mapping):
        return Shape.CONTAINER
    if isinstance(value, (list, tuple)):
        return Shape.SEQUENCE
    return Shape.SCALAR


Rule: _typing.TypeAlias = _typing.Callable[[_typing.Any, _typing.Any], _typing.Any]


def _replace(current: _typing.Any, new: _typing.Any) -> _typing.Any:
    return new


def _descend(current: _typing.Any, new: _typing.Any) -> _typing.Any:
    return current


def _fresh_branch(current: _typing.Any, new: _typing.Any) -> dict[_typing.Any, _typing.Any]:
    return {}


def _prepend(current: _typing.Any, new: _typing.Any) -> list[_typing.Any]:
    return [new, *current]


def _singleton(current: _typing.Any, new: _typing.Any) -> list[_typing.Any]:
    return [new]


def _pair(current: _typing.Any, new: _typing.Any) -> list[_typing.Any]:
    return [new, current]


_O = types.Mode.OVERWRITE
_A = types.Mode.ACCUMULATE

# (mode, shape, is_final) -> rule
POLICY_TABLE: dict[tuple[types.Mode, Shape, bool], Rule] = {
    (_O, Shape.ABSENT, True): _replace,
    (_O, Shape.SCALAR, True): _replace,
    (_O, Shape.SEQUENCE, True): _replace,
    (_O, Shape.CONTAINER, True): _replace,
    (_O, Shape.ABSENT, False): _fresh_branch,
    (_O, Shape.SCALAR, False): _fresh_branch,
    (_O, Shape.SEQUENCE, False): _fresh_branch,
    (_O, Shape.CONTAINER, False): _descend,
    (_A, Shape.ABSENT, True): _singleton,
    (_A, Shape.SCALAR, True): _pair,
    (_A, Shape.SEQUENCE, True): _prepend,
    (_A, Shape.CONTAINER, True): _pair,
    (_A, Shape.ABSENT, False): _fresh_branch,
    (_A, Shape.SCALAR, False): _fresh_branch,
    # Paths never descend into sequences
    (_A, Shape.SEQUENCE, False): _fresh_branch,
    (_A, Shape.CONTAINER, False): _descend,
}


def next_value(
    mode: types.Mode,
    current: _typing.Any,
    new: _typing.Any,
    is_final: bool,
) -> _typing.Any:
    """
    Decide the value that replaces ``current`` at one path step.

    Args:
        mode: Write policy.
        current: Value stored at the step, or ABSENT.
        new: Value being written by the caller.
        is_final: Whether this step is the last key of the path.

    Returns:
        The replacement. For non-final steps this is always a Mapping:
        either ``current`` itself or a fresh empty dict.
    """
    rule = POLICY_TABLE[(mode, classify(current), bool(is_final))]
    return rule(current, new)


def is_discarding(mode: types.Mode, current: _typing.Any, is_final: bool) -> bool:
    """
    Check whether an intermediate step drops a present value.

    True when a non-final step replaces a present non-container with a
    fresh branch. Final overwrites are the caller's intent and never count.
    """
    if is_final or current is types.ABSENT:
        return False
    return POLICY_TABLE[(mode, classify(current), False)] is _fresh_branch
