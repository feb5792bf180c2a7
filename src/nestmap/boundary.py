"""
Conversions at the edge of the core path operations.

The core functions only understand Mappings. This module turns record-like
objects (pydantic models, dataclass instances) into plain dicts and back,
and provides the small top-level key helpers that sit next to the core:

- to_container / from_container: record <-> dict
- deep_put_record / deep_get_record / del_in_record: core operations that
  keep the record type
- stringify_keys / symbolize_keys / to_symbol: top-level key conversion
- switch: swap keys and values
- append_list: prepend to a list value under one key
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import enum as _enum
import typing as _typing

import pydantic as _pydantic

import nestmap.core as core
import nestmap.types as types

R = _typing.TypeVar("R")
E = _typing.TypeVar("E", bound=_enum.Enum)


def to_container(record: _typing.Any) -> dict[_typing.Any, _typing.Any]:
    """
    Convert a record-like object into a plain dict (one level deep).

    Nested models and dataclasses are kept as objects, so a later
    from_container gets them back unchanged.

    Raises:
        TypeError: If record is not a Mapping, pydantic model or dataclass instance.
    """
    if isinstance(record, _abc.Mapping):
        return dict(record)
    if isinstance(record, _pydantic.BaseModel):
        return {name: getattr(record, name) for name in type(record).model_fields}
    if _dataclasses.is_dataclass(record) and not isinstance(record, type):
        return {field.name: getattr(record, field.name) for field in _dataclasses.fields(record)}
    raise TypeError(f"Cannot convert {type(record).__name__} to a container")


def from_container(container: types.Container, like: _typing.Any) -> _typing.Any:
    """
    Rebuild a record of the same type as ``like`` from a container.

    Args:
        container: Field values.
        like: A record instance or a record class.

    Returns:
        Instance of like's type. Mappings come back as plain dicts.

    Raises:
        TypeError: If like is not a Mapping, pydantic model or dataclass.
    """
    cls = like if isinstance(like, type) else type(like)
    if issubclass(cls, _abc.Mapping):
        return dict(container)
    if issubclass(cls, _pydantic.BaseModel):
        return cls.model_validate(dict(container))
    if _dataclasses.is_dataclass(cls):
        return cls(**container)
    raise TypeError(f"Cannot build {cls.__name__} from a container")


def deep_put_record(
    record: R,
    path: types.Path,
    value: _typing.Any,
    mode: types.Mode | str = types.Mode.OVERWRITE,
    *,
    copy_value: bool = False,
) -> R:
    """deep_put on a record, returning a record of the same type."""
    result = core.deep_put(to_container(record), path, value, mode, copy_value=copy_value)
    return _typing.cast(R, from_container(result, record))


def deep_get_record(
    record: _typing.Any,
    path: types.Path,
    default: _typing.Any = types.ABSENT,
) -> _typing.Any:
    """deep_get on a record."""
    return core.deep_get(to_container(record), path, default)


def del_in_record(record: R, path: types.Path) -> R:
    """del_in on a record, returning a record of the same type."""
    result = core.del_in(to_container(record), path)
    return _typing.cast(R, from_container(result, record))


def _key_to_string(key: _typing.Any) -> _typing.Any:
    if isinstance(key, str):
        return key
    if isinstance(key, _enum.Enum):
        return key.name
    return str(key)


def stringify_keys(container: types.Container) -> dict[str, _typing.Any]:
    """
    Turn all top-level keys into strings, leaving existing strings alone.

    Enum members become their name; other keys go through str().
    Nested containers are not touched.
    """
    return {_key_to_string(k): v for k, v in container.items()}


def to_symbol(key: str | E, symbols: type[E]) -> E:
    """
    Convert a string to a member of ``symbols`` by name.

    Members of ``symbols`` are returned unchanged.

    Raises:
        KeyError: If no member has that name.
    """
    if isinstance(key, symbols):
        return key
    return symbols[_typing.cast(str, key)]


def symbolize_keys(container: types.Container, symbols: type[E]) -> dict[E, _typing.Any]:
    """
    Turn all top-level string keys into members of ``symbols``.

    Nested containers are not touched.

    Raises:
        KeyError: If a key names no member.
    """
    return {to_symbol(k, symbols): v for k, v in container.items()}


def switch(container: types.Container) -> dict[_typing.Any, _typing.Any]:
    """
    Swap keys and values.

    Values must be hashable. If two keys share a value, the later one wins.
    """
    return {v: k for k, v in container.items()}


def append_list(
    container: types.Container,
    key: types.Key,
    value: _typing.Any,
) -> dict[_typing.Any, _typing.Any]:
    """
    Prepend value to the list under key, creating ``[value]`` if key is missing.

    Returns a new dict; the existing list is not modified.

    Raises:
        TypeError: If the existing value is not a list or tuple.
    """
    result = dict(container)
    existing = result.get(key, types.ABSENT)
    if existing is types.ABSENT:
        result[key] = [value]
    elif isinstance(existing, (list, tuple)):
        result[key] = [value, *existing]
    else:
        raise TypeError(
            f"Value under {key!r} must be a list, got {type(existing).__name__}"
        )
    return result
