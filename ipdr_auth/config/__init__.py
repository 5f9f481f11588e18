"""Configuration loading and settings management."""

from .settings import DEFAULT_ACCESS_SECRET, DEFAULT_REFRESH_SECRET, Settings, load_settings

__all__ = ["DEFAULT_ACCESS_SECRET", "DEFAULT_REFRESH_SECRET", "Settings", "load_settings"]
