"""
Exceptions raised by nestmap.

All exceptions derive from NestmapError. The concrete classes also derive
from the matching builtin (ValueError, KeyError) so callers that already
catch those keep working.
"""

from __future__ import annotations

import typing as _typing


class NestmapError(Exception):
    """Base class for all nestmap errors."""

    pass


class InvalidPathError(NestmapError, ValueError):
    """
    Raised when a path cannot be used or cannot be resolved.

    Covers empty paths, string paths, non-container roots and (for
    del_in) a parent path that does not lead to a container.
    """

    def __init__(self, path: _typing.Any, message: str) -> None:
        self.path = path
        super().__init__(f"Invalid path {path!r}: {message}")


class MissingGroupFieldError(NestmapError, KeyError):
    """Raised when a record passed to group_by lacks a grouping field."""

    def __init__(self, field: _typing.Any, index: int) -> None:
        self.field = field
        self.index = index
        super().__init__(f"Record {index} has no group field {field!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class ConfigFileError(NestmapError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _typing.Any, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")
