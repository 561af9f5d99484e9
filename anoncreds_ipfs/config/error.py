"""Errors for config modules."""

from ..core.error import BaseError


class ConfigError(BaseError):
    """A base exception for all configuration errors."""


class SettingsError(ConfigError):
    """A setting is missing or holds a value of the wrong type."""
