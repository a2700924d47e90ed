"""Config validation errors.

Raised while settings, custom fields or the processor are being built, so a
misconfigured deployment fails at startup instead of on the first event.
"""
from __future__ import annotations

from typing import Any

from guard4j.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Configuration is invalid or could not be loaded."""

    default_code = "config_error"

    def __init__(self, message: str, *, setting_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.setting_name = setting_name
        if setting_name is not None:
            self.detail.setdefault("setting", setting_name)


class MissingRequiredSettingError(ConfigError):
    """A required setting or custom field part is absent or blank."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing or blank", setting_name=setting_name)


class InvalidSettingValueError(ConfigError):
    """A setting is present but its value cannot be used."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            setting_name=setting_name,
            detail={"value": value, "reason": reason},
        )
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
