"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with NESTMAP_ prefix
3. Layered YAML config files:
   - Project config: NESTMAP_CONFIG_FILE, or ./nestmap.yaml
   - User config: ~/.config/nestmap/config.yaml

Example:
  NESTMAP_GROUP_ORDER=insertion
  NESTMAP_COPY_VALUES=true
"""

import functools as _functools
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import nestmap.config.sources as sources

GroupOrder: _typing.TypeAlias = _typing.Literal["newest_first", "insertion"]


class Settings(_pydantic_settings.BaseSettings):
    """
    nestmap configuration settings.

    All settings can be overridden via environment variables with NESTMAP_ prefix.

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (NESTMAP_*)
    3. Project config file
    4. User config file
    5. Field defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="NESTMAP_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings, constructor args (highest)
        2. env_settings (NESTMAP_* env vars)
        3. yaml layers (project, then user)
        4. field defaults (lowest)
        """
        return (
            init_settings,
            env_settings,
            sources.YamlLayersSettingsSource(settings_cls),
        )

    group_order: GroupOrder = _pydantic.Field(
        default="newest_first",
        description="Order of records inside group_by leaves",
    )
    """newest_first keeps the prepend order; insertion restores input order."""

    copy_values: bool = _pydantic.Field(
        default=False,
        description="Deep-copy values written by deep_put",
    )
    """When False, written values are shared with the caller."""


@_functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide settings, loading them on first use.

    Call ``get_settings.cache_clear()`` after changing the environment or
    config files to force a reload.
    """
    return Settings()
