"""Config – 12-factor settings and validation errors."""

from guard4j.config.settings import EnvSettingsLoader, Settings, SettingsLoader, parse_flag
from guard4j.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "parse_flag",
]
