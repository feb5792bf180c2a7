"""
Core write operations with their defaults taken from Settings.

The functions in nestmap.core never look at the environment or config
files. Callers who want NESTMAP_* variables and nestmap.yaml to decide
value copying and group order use these instead. An explicit argument
always wins over the setting.

Example:
    >>> import nestmap.config.configured as configured
    >>> configured.group_by(records, ["group"])  # order from NESTMAP_GROUP_ORDER
"""

import collections.abc as _abc
import typing as _typing

import nestmap.config.settings as settings
import nestmap.core as core
import nestmap.types as types


def deep_put(
    container: types.Container,
    path: types.Path,
    value: _typing.Any,
    mode: types.Mode | str = types.Mode.OVERWRITE,
    *,
    copy_value: bool | None = None,
) -> dict[_typing.Any, _typing.Any]:
    """core.deep_put; copy_value=None uses the copy_values setting."""
    if copy_value is None:
        copy_value = settings.get_settings().copy_values
    return core.deep_put(container, path, value, mode, copy_value=copy_value)


def group_by(
    records: _abc.Iterable[types.Container],
    group_fields: types.Path,
    *,
    order: settings.GroupOrder | None = None,
) -> dict[_typing.Any, _typing.Any]:
    """core.group_by; order=None uses the group_order setting."""
    if order is None:
        order = settings.get_settings().group_order
    return core.group_by(records, group_fields, order=order)
