"""Configuration management for Chronicle Desktop."""

from .loader import DEFAULT_SETTINGS, load_settings, save_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "load_settings",
    "save_settings",
]
