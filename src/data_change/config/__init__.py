"""Configuration management for DataChange.

Usage:
    >>> from data_change.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.dialect)
"""

from data_change.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
