"""
Deep read, write and delete for nested containers, plus multi-field grouping.

Every operation is a pure function: the input container is never mutated
and writes return a new root. Containers along the written path are fresh
dicts, everything else is shared with the input. Defaults are fixed here;
nestmap.config.configured has variants that take them from Settings.

Example:
    >>> deep_put({}, ["a", "b", "c"], "0")
    {'a': {'b': {'c': '0'}}}
    >>> deep_put({"a": {"b": {"c": ["1"]}}}, ["a", "b", "c"], "2", Mode.ACCUMULATE)
    {'a': {'b': {'c': ['2', '1']}}}
    >>> del_in({"a": {"b": {"d": 1, "e": 1}}}, ["a", "b", "d"])
    {'a': {'b': {'e': 1}}}
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import logging as _logging
import typing as _typing

import nestmap.errors as errors
import nestmap.policy as policy
import nestmap.types as types
import nestmap.zipper as zipper

_logger = _logging.getLogger(__name__)

Mode = types.Mode


def _require_container(container: _typing.Any, path: _typing.Any) -> None:
    if not isinstance(container, _abc.Mapping):
        raise errors.InvalidPathError(
            path, f"root must be a mapping, got {type(container).__name__}"
        )


def deep_get(
    container: types.Container,
    path: types.Path,
    default: _typing.Any = types.ABSENT,
) -> _typing.Any:
    """
    Get the value at an arbitrarily deep path.

    A missing key, or a non-container met before the path ends, is not an
    error: ``default`` is returned (ABSENT unless given).

    Raises:
        InvalidPathError: If path is empty or a string.
    """
    keys = zipper.validate_path(path)
    value = zipper.read_path(container, keys)
    if value is types.ABSENT:
        return default
    return value


def deep_put(
    container: types.Container,
    path: types.Path,
    value: _typing.Any,
    mode: Mode | str = Mode.OVERWRITE,
    *,
    copy_value: bool = False,
) -> dict[_typing.Any, _typing.Any]:
    """
    Put a value at an arbitrarily deep path, creating containers as needed.

    Every intermediate key must end up holding a container. A non-container
    found there is replaced by an empty dict, which can lose data:
    ``deep_put({"a": 1}, ["a", "b"], 2)`` gives ``{"a": {"b": 2}}``.

    In ACCUMULATE mode the final key collects values in a list, newest
    first. An existing list gets the value prepended; an existing scalar
    or container becomes ``[value, existing]``.

    Args:
        container: Root mapping. Not modified.
        path: Non-empty sequence of keys.
        value: Value to write.
        mode: Mode.OVERWRITE (default) or Mode.ACCUMULATE, or their names.
        copy_value: Deep-copy value before inserting it.

    Returns:
        New root dict.

    Raises:
        InvalidPathError: If path is empty or a string, or container is
            not a mapping.
    """
    keys = zipper.validate_path(path)
    _require_container(container, keys)
    mode = Mode.coerce(mode)
    if copy_value:
        value = _copy.deepcopy(value)

    frames: list[zipper.Frame] = []
    node: types.Container = container
    leaf: _typing.Any = types.ABSENT
    last = len(keys) - 1
    for depth, key in enumerate(keys):
        is_final = depth == last
        current = node.get(key, types.ABSENT)
        replacement = policy.next_value(mode, current, value, is_final)
        if policy.is_discarding(mode, current, is_final):
            _logger.debug(
                "Replacing %s at %r with a container",
                type(current).__name__,
                keys[: depth + 1],
            )
        frames.append(zipper.Frame(node, key))
        if is_final:
            leaf = replacement
        else:
            node = replacement

    return zipper.rebuild(frames, leaf)


def del_in(
    container: types.Container,
    path: types.Path,
) -> dict[_typing.Any, _typing.Any]:
    """
    Remove a key arbitrarily deep in a structure.

    Deleting a key that does not exist is a no-op and returns an equal
    (but new) structure.

    Raises:
        InvalidPathError: If path is empty or a string, or the path
            without its last key does not lead to a container.
    """
    keys = zipper.validate_path(path)
    _require_container(container, keys)
    parent_path, last_key = keys[:-1], keys[-1]

    parent = zipper.read_path(container, parent_path)
    if not isinstance(parent, _abc.Mapping):
        raise errors.InvalidPathError(
            keys, f"parent {parent_path!r} is not a container"
        )

    new_parent = dict(parent)
    if last_key in new_parent:
        del new_parent[last_key]
    else:
        _logger.debug("Key %r not present at %r, nothing to delete", last_key, parent_path)

    frames = zipper.descend_existing(container, parent_path)
    return zipper.rebuild(frames, new_parent)


def group_by(
    records: _abc.Iterable[types.Container],
    group_fields: types.Path,
    *,
    order: str = "newest_first",
) -> dict[_typing.Any, _typing.Any]:
    """
    Group records into a nested tree keyed by several of their fields.

    Each record lands in the list at ``[record[f] for f in group_fields]``.
    The result equals folding the records through
    ``deep_put(acc, path, record, Mode.ACCUMULATE)``, but the tree is private
    to this call, so it is built in place rather than copied per record.

    Example:
        >>> group_by(
        ...     [{"name": "stian", "group": 1, "cat": 2},
        ...      {"name": "per", "group": 1, "cat": 1}],
        ...     ["group", "cat"],
        ... )
        {1: {2: [{'name': 'stian', 'group': 1, 'cat': 2}], 1: [{'name': 'per', 'group': 1, 'cat': 1}]}}

    Args:
        records: Mappings that all contain every group field.
        group_fields: Non-empty sequence of field names, outermost first.
        order: "newest_first" (most recently processed record first in
            each leaf) or "insertion" (input order).

    Raises:
        InvalidPathError: If group_fields is empty or a string.
        MissingGroupFieldError: If a record lacks a group field.
    """
    fields = zipper.validate_path(group_fields)
    if order not in ("newest_first", "insertion"):
        raise ValueError(f"Unknown group order: {order!r}")

    grouped: dict[_typing.Any, _typing.Any] = {}
    leaves: list[list[_typing.Any]] = []
    count = 0
    for index, record in enumerate(records):
        if not isinstance(record, _abc.Mapping):
            raise TypeError(
                f"Record {index} must be a mapping, got {type(record).__name__}"
            )
        path = []
        for field in fields:
            if field not in record:
                raise errors.MissingGroupFieldError(field, index)
            path.append(record[field])

        node = grouped
        for key in path[:-1]:
            node = node.setdefault(key, {})
        leaf = node.get(path[-1])
        if leaf is None:
            leaf = node[path[-1]] = []
            leaves.append(leaf)
        leaf.append(record)
        count += 1

    # Leaves were filled in input order; the accumulate rule prepends.
    if order == "newest_first":
        for leaf in leaves:
            leaf.reverse()
    _logger.debug("Grouped %d records by %r (%s)", count, fields, order)
    return grouped
