"""
Configuration module for nestmap.

Uses pydantic-settings for environment variable loading.
"""

from nestmap.config.settings import GroupOrder, Settings, get_settings

__all__ = ["GroupOrder", "Settings", "get_settings"]
