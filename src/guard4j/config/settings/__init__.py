"""Config settings – 12-factor env-based configuration."""
from guard4j.config.settings.base import Settings
from guard4j.config.settings.loaders import EnvSettingsLoader, SettingsLoader, parse_flag

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader", "parse_flag"]
