"""Custom pydantic-settings source for nestmap configuration.

This module provides:

- YamlLayersSettingsSource: A pydantic-settings source that loads
  configuration from layered YAML files and merges them leaf by leaf
  with nestmap's own deep_put.

Configuration layers (in precedence order, highest first):
1. Environment variables (handled by pydantic-settings)
2. Project config: NESTMAP_CONFIG_FILE, or ./nestmap.yaml
3. User config: ~/.config/nestmap/config.yaml (or NESTMAP_CONFIG_DIR)

Environment variables:
- NESTMAP_CONFIG_DIR: Override user config directory (default: ~/.config/nestmap)
- NESTMAP_CONFIG_FILE: Explicit project config file
"""

import collections.abc as _abc
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import nestmap.core as core
import nestmap.errors as errors

_logger = _logging.getLogger(__name__)

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "NESTMAP_CONFIG_DIR"

# Environment variable naming an explicit project config file
ENV_CONFIG_FILE = "NESTMAP_CONFIG_FILE"

PROJECT_CONFIG_NAME = "nestmap.yaml"


def get_user_config_dir() -> _pathlib.Path:
    """Get the user config directory, respecting NESTMAP_CONFIG_DIR."""
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "nestmap"


def get_user_config_path() -> _pathlib.Path:
    """Get the path to the user config file."""
    return get_user_config_dir() / "config.yaml"


def get_project_config_path() -> _pathlib.Path:
    """Get the path to the project config file, respecting NESTMAP_CONFIG_FILE."""
    config_file_env = _os.environ.get(ENV_CONFIG_FILE)
    if config_file_env:
        return _pathlib.Path(config_file_env)
    return _pathlib.Path.cwd() / PROJECT_CONFIG_NAME


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any] | None:
    """
    Load a YAML file and return its contents as a dict.

    Returns:
        Parsed YAML contents, or None if file is empty.

    Raises:
        ConfigFileError: If the file cannot be read, is malformed YAML,
            or contains non-dict content at the top level.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise errors.ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise errors.ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise errors.ConfigFileError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        return None

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise errors.ConfigFileError(
            path,
            f"config must be a YAML mapping (dict), got {type_name}",
        )

    return parsed


def iter_leaves(
    data: _abc.Mapping[_typing.Any, _typing.Any],
    prefix: tuple[_typing.Any, ...] = (),
) -> _typing.Iterator[tuple[tuple[_typing.Any, ...], _typing.Any]]:
    """
    Yield (path, value) for every non-mapping value in a nested mapping.

    Empty mappings are yielded as leaves so they survive a merge.
    """
    for key, value in data.items():
        path = prefix + (key,)
        if isinstance(value, _abc.Mapping) and value:
            yield from iter_leaves(value, path)
        else:
            yield path, value


def merge_layers(*layers: _abc.Mapping[_typing.Any, _typing.Any]) -> dict[str, _typing.Any]:
    """
    Merge layers in ascending precedence order (last layer wins).

    Nested mappings merge key by key; any other value replaces what
    lower layers had at the same path.
    """
    merged: dict[str, _typing.Any] = {}
    for layer in layers:
        for path, value in iter_leaves(layer):
            merged = core.deep_put(merged, path, value)
    return merged


class YamlLayersSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that loads layered YAML config files.

    Layers (lowest to highest precedence):
    1. User config (~/.config/nestmap/config.yaml)
    2. Project config (NESTMAP_CONFIG_FILE or ./nestmap.yaml)

    Missing files are skipped. Present files must be valid YAML mappings.
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        *,
        user_config_path: _pathlib.Path | None = None,
        project_config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            user_config_path: Override path for user config file (for testing).
            project_config_path: Override path for project config file (for testing).
        """
        super().__init__(settings_cls)
        self._user_config_path = user_config_path or get_user_config_path()
        self._project_config_path = project_config_path or get_project_config_path()
        self._loaded_layers: list[tuple[str, _pathlib.Path]] = []
        self._data = self._load_config_layers()

    def _load_config_layers(self) -> dict[str, _typing.Any]:
        layers: list[dict[str, _typing.Any]] = []
        for name, path in (
            ("user", self._user_config_path),
            ("project", self._project_config_path),
        ):
            if not path.exists():
                continue
            content = load_yaml_file(path)
            if content:
                layers.append(content)
                self._loaded_layers.append((name, path))
                _logger.debug("Loaded %s config layer from %s", name, path)
        return merge_layers(*layers)

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """
        Get info about layers that were actually loaded.

        Returns:
            List of (layer_name, path) tuples, lowest precedence first.
        """
        return list(self._loaded_layers)

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        """
        Get value for a field from the merged layers.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (_abc.Mapping, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return merged config as a plain dict for Pydantic validation."""
        return dict(self._data)
