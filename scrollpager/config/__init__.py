"""Configuration management."""

from .settings import PaginationSettings, RetrySettings, ScrollSettings, SettingsManager

__all__ = ["PaginationSettings", "RetrySettings", "ScrollSettings", "SettingsManager"]
