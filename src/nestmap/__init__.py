"""
nestmap - deep path operations on nested mappings.

Read, write and delete values at arbitrary depth inside nested dicts
without mutating the input, and group records into a nested tree by
several of their fields.

Example:
    >>> import nestmap
    >>> nestmap.deep_put({}, ["a", "b"], 1)
    {'a': {'b': 1}}
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("nestmap")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from nestmap.boundary import (  # noqa: E402
    append_list,
    deep_get_record,
    deep_put_record,
    del_in_record,
    from_container,
    stringify_keys,
    switch,
    symbolize_keys,
    to_container,
    to_symbol,
)
from nestmap.core import deep_get, deep_put, del_in, group_by  # noqa: E402
from nestmap.errors import (  # noqa: E402
    ConfigFileError,
    InvalidPathError,
    MissingGroupFieldError,
    NestmapError,
)
from nestmap.types import ABSENT, Mode, is_absent  # noqa: E402

__all__ = [
    "ABSENT",
    "ConfigFileError",
    "InvalidPathError",
    "MissingGroupFieldError",
    "Mode",
    "NestmapError",
    "__version__",
    "__version_info__",
    "append_list",
    "deep_get",
    "deep_get_record",
    "deep_put",
    "deep_put_record",
    "del_in",
    "del_in_record",
    "from_container",
    "group_by",
    "is_absent",
    "stringify_keys",
    "switch",
    "symbolize_keys",
    "to_container",
    "to_symbol",
]
