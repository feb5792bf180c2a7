"""
Type aliases and markers shared across nestmap.

This module provides:
- Key / Path: aliases for the tokens used to address nested containers
- Mode: write policy selector for deep_put
- ABSENT: sentinel returned when nothing exists at a path
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

# Any hashable value can be used as a key.
# "a" and an enum member named a are different keys.
Key: _typing.TypeAlias = _typing.Hashable

# Example: ("config", "model", "name") represents config.model.name
Path: _typing.TypeAlias = _abc.Sequence[Key]

# Nested key-value container. Writes always produce plain dicts.
Container: _typing.TypeAlias = _abc.Mapping[_typing.Any, _typing.Any]


class Mode(_enum.Enum):
    """
    Write policy for deep_put.

    OVERWRITE replaces the value at the final key. ACCUMULATE collects
    values into a list at the final key, newest first.
    """

    OVERWRITE = "overwrite"
    ACCUMULATE = "accumulate"

    @classmethod
    def coerce(cls, value: Mode | str) -> Mode:
        """
        Accept a Mode or its string name.

        "map" and "list" are accepted as aliases for OVERWRITE and
        ACCUMULATE respectively.

        Raises:
            ValueError: If the string names no mode.
        """
        if isinstance(value, cls):
            return value
        name = str(value).lower()
        if name in _MODE_ALIASES:
            return _MODE_ALIASES[name]
        raise ValueError(f"Unknown mode: {value!r}")


_MODE_ALIASES: dict[str, Mode] = {
    "overwrite": Mode.OVERWRITE,
    "accumulate": Mode.ACCUMULATE,
    "map": Mode.OVERWRITE,
    "list": Mode.ACCUMULATE,
}


# Helper function to reconstruct ABSENT singleton during unpickle
def _get_absent_singleton() -> _AbsentType:
    """Return the ABSENT singleton. Called by pickle to reconstruct."""
    return ABSENT


class _AbsentType:
    """
    Sentinel type meaning "no value exists at this path".

    Distinct from None, which is a regular stored value. Falsy, so
    ``if deep_get(...)`` reads naturally, but compare with ``is ABSENT``
    when None or other falsy values may be stored.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[_typing.Callable[[], _AbsentType], tuple[()]]:
        """Pickle support: ensure singleton is preserved."""
        return (_get_absent_singleton, ())


ABSENT = _AbsentType()


def is_absent(value: _typing.Any) -> bool:
    """Check if a value is the ABSENT sentinel."""
    return value is ABSENT
