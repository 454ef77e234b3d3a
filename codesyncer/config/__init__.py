"""Configuration package."""

from codesyncer.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
