"""
Shared pytest fixtures for nestmap tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import nestmap.config as config

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "NESTMAP_GROUP_ORDER",
    "NESTMAP_COPY_VALUES",
    "NESTMAP_CONFIG_DIR",
    "NESTMAP_CONFIG_FILE",
]


@_pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: _pathlib.Path,
    monkeypatch: _pytest.MonkeyPatch,
) -> _typing.Iterator[None]:
    """
    Isolate every test from the real environment and config files.

    NESTMAP_* variables are removed, the user config dir and the working
    directory point into tmp_path, and the cached settings are reset
    before and after the test.
    """
    for key in ENV_KEYS_TO_CLEAR:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("NESTMAP_CONFIG_DIR", str(tmp_path / "user-config"))
    monkeypatch.chdir(tmp_path)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@_pytest.fixture
def nested() -> dict[str, _typing.Any]:
    """Three-level structure with a sibling branch."""
    return {
        "a": {"b": {"c": "1"}},
        "z": {"keep": [1, 2]},
    }


@_pytest.fixture
def people() -> list[dict[str, _typing.Any]]:
    """Records for grouping tests."""
    return [
        {"name": "stian", "group": 1, "cat": 2},
        {"name": "per", "group": 1, "cat": 1},
        {"name": "kari", "group": 2, "cat": 1},
        {"name": "ola", "group": 1, "cat": 2},
    ]
