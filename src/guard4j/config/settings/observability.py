"""Config settings – ObservabilitySettings.

Loaded from ``GUARD4J_*`` environment variables by
:class:`~guard4j.config.settings.loaders.EnvSettingsLoader`::

    GUARD4J_METRICS_PREFIX=payments
    GUARD4J_INCLUDE_USER_ID=false
    GUARD4J_CUSTOM_FIELDS=tenant=header:X-Tenant-Id,region=diagnostic-context:region
"""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from guard4j.config.settings.base import Settings
from guard4j.config.validation import InvalidSettingValueError
from guard4j.observability.context.config import ContextConfig, CustomField


@dataclasses.dataclass
class ObservabilitySettings(Settings):
    _prefix: ClassVar[str] = "GUARD4J"

    enabled: bool = True
    metrics_enabled: bool = True
    metrics_prefix: str | None = None
    logging_enabled: bool = True
    include_diagnostic_context: bool = True
    application_name: str | None = None
    context_enabled: bool = True
    include_trace_id: bool = True
    include_user_id: bool = True
    include_correlation_id: bool = True
    custom_fields: list[str | CustomField] = dataclasses.field(default_factory=list)

    def _validate(self) -> None:
        if self.metrics_prefix is not None and self.metrics_prefix.strip():
            if any(ch.isspace() for ch in self.metrics_prefix.strip()):
                raise InvalidSettingValueError(
                    "metrics_prefix", self.metrics_prefix, "must not contain whitespace"
                )
        # parse eagerly so a malformed field fails at startup
        self.context_config()

    def context_config(self) -> ContextConfig:
        return ContextConfig(
            enabled=self.context_enabled,
            include_trace_id=self.include_trace_id,
            include_user_id=self.include_user_id,
            include_correlation_id=self.include_correlation_id,
            custom_fields=tuple(
                f if isinstance(f, CustomField) else CustomField.parse(f) for f in self.custom_fields
            ),
        )


__all__ = ["ObservabilitySettings"]
