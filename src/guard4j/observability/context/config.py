"""Observability – ContextConfig and CustomField.

Declares which correlation data the resolver collects. Invalid custom
fields fail at construction so a bad deployment is caught at startup.
"""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Iterable, Mapping

from guard4j.config.settings.loaders import parse_flag
from guard4j.config.validation import InvalidSettingValueError, MissingRequiredSettingError


class FieldSource(str, enum.Enum):
    """Where a custom field is looked up."""

    DIAGNOSTIC_CONTEXT = "diagnostic-context"
    HEADER = "header"
    ATTRIBUTE = "attribute"

    @classmethod
    def parse(cls, value: str | FieldSource) -> FieldSource:
        if isinstance(value, FieldSource):
            return value
        normalized = value.strip().lower().replace("_", "-")
        normalized = _SOURCE_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidSettingValueError("source", value, "unknown field source") from None


_SOURCE_ALIASES = {
    "mdc": "diagnostic-context",
    "diagnostic": "diagnostic-context",
    "headers": "header",
    "attributes": "attribute",
}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclasses.dataclass(frozen=True)
class CustomField:
    """Extra context entry: stored under *name*, looked up by *key* in *source*."""

    name: str
    source: FieldSource
    key: str

    def __post_init__(self) -> None:
        if _blank(self.name):
            raise MissingRequiredSettingError("name")
        if _blank(self.source):
            raise MissingRequiredSettingError("source")
        if _blank(self.key):
            raise MissingRequiredSettingError("key")
        object.__setattr__(self, "source", FieldSource.parse(self.source))

    @classmethod
    def parse(cls, text: str) -> CustomField:
        """Build from ``"name=source:key"`` (e.g. ``"tenant=header:X-Tenant-Id"``)."""
        name, sep, rest = text.partition("=")
        source, sep2, key = rest.partition(":")
        if not sep or not sep2:
            raise InvalidSettingValueError("custom_fields", text, "expected 'name=source:key'")
        return cls(name=name.strip(), source=source.strip(), key=key.strip())  # type: ignore[arg-type]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CustomField:
        return cls(name=data.get("name"), source=data.get("source"), key=data.get("key"))  # type: ignore[arg-type]


@dataclasses.dataclass(frozen=True)
class ContextConfig:
    """Which context fields to extract. All built-in fields are on by default."""

    enabled: bool = True
    include_trace_id: bool = True
    include_user_id: bool = True
    include_correlation_id: bool = True
    custom_fields: tuple[CustomField, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "custom_fields", tuple(_coerce_fields(self.custom_fields)))

    @classmethod
    def disabled(cls) -> ContextConfig:
        return cls(enabled=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ContextConfig:
        """Accept snake_case or camelCase keys, as found in YAML/JSON config.

        Flags may be booleans or on/off words (``"false"``, ``"0"``, ``"off"``);
        anything else raises :class:`InvalidSettingValueError`.
        """

        def pick(*names: str, default: Any) -> tuple[str, Any]:
            for name in names:
                if name in data:
                    return name, data[name]
            return names[0], default

        def flag(*names: str) -> bool:
            return parse_flag(*pick(*names, default=True))

        _, fields = pick("custom_fields", "customFields", default=())
        return cls(
            enabled=flag("enabled", "context_enabled", "contextEnabled"),
            include_trace_id=flag("include_trace_id", "includeTraceId"),
            include_user_id=flag("include_user_id", "includeUserId"),
            include_correlation_id=flag("include_correlation_id", "includeCorrelationId"),
            custom_fields=tuple(_coerce_fields(fields or ())),
        )


def _coerce_fields(items: Iterable[Any]) -> Iterable[CustomField]:
    for item in items:
        if isinstance(item, CustomField):
            yield item
        elif isinstance(item, str):
            yield CustomField.parse(item)
        elif isinstance(item, Mapping):
            yield CustomField.from_mapping(item)
        else:
            raise InvalidSettingValueError("custom_fields", item, "unsupported custom field definition")


__all__ = ["ContextConfig", "CustomField", "FieldSource"]
