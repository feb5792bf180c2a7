"""
Path zipper for persistent updates of nested containers.

A write descends from the root recording one Frame per container it passes
through, then rebuilds bottom-up: each frame's container is copied with the
rebuilt child stored under the frame's key. Containers on the path are new
dicts; everything off the path is shared with the input.

Example:
    >>> root = {"a": {"b": 1}, "z": {"keep": True}}
    >>> frames = [Frame(root, "a"), Frame(root["a"], "b")]
    >>> new_root = rebuild(frames, 2)
    >>> new_root
    {'a': {'b': 2}, 'z': {'keep': True}}
    >>> new_root["z"] is root["z"]
    True
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import typing as _typing

import nestmap.errors as errors
import nestmap.types as types


@_dataclasses.dataclass(frozen=True, slots=True)
class Frame:
    """One step of a descent: the container passed through and the key taken."""

    node: types.Container
    key: types.Key


def validate_path(path: _typing.Any) -> tuple[types.Key, ...]:
    """
    Check a path and return it as a tuple.

    Raises:
        InvalidPathError: If path is a string, not a sequence, or empty.
    """
    if isinstance(path, (str, bytes, bytearray)):
        raise errors.InvalidPathError(path, "path must be a sequence of keys, not a string")
    if not isinstance(path, _abc.Sequence):
        raise errors.InvalidPathError(path, "path must be a sequence of keys")
    if len(path) == 0:
        raise errors.InvalidPathError(path, "path must not be empty")
    return tuple(path)


def read_path(root: _typing.Any, path: _abc.Sequence[types.Key]) -> _typing.Any:
    """
    Resolve a path against a nested structure.

    Returns:
        The value at path, or ABSENT if a key is missing or a non-Mapping
        is met while keys remain. An empty path returns root.
    """
    current = root
    for key in path:
        if not isinstance(current, _abc.Mapping) or key not in current:
            return types.ABSENT
        current = current[key]
    return current


def descend_existing(root: types.Container, path: _abc.Sequence[types.Key]) -> list[Frame]:
    """
    Record frames along a path whose containers must all exist.

    Used when writing back at a path that was already resolved, so every
    prefix of path leads to a Mapping.

    Raises:
        InvalidPathError: If a step does not lead to a Mapping.
    """
    frames: list[Frame] = []
    current: _typing.Any = root
    for key in path:
        if not isinstance(current, _abc.Mapping):
            raise errors.InvalidPathError(tuple(path), f"cannot navigate through non-container at {key!r}")
        frames.append(Frame(current, key))
        current = current.get(key, types.ABSENT)
    return frames


def rebuild(frames: _abc.Sequence[Frame], leaf: _typing.Any) -> _typing.Any:
    """
    Rebuild ancestors bottom-up, placing leaf under the deepest frame.

    Returns:
        The new root. With no frames, leaf itself is the new root.
    """
    child = leaf
    for frame in reversed(frames):
        node = dict(frame.node)
        node[frame.key] = child
        child = node
    return child
