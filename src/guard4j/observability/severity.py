"""Observability – Severity scale shared by events, logs and alerting."""
from __future__ import annotations

import enum
import logging


class Severity(enum.Enum):
    """Ordered severity, least to most severe.

    Used three ways: how bad an error is, which level an event is logged at,
    and which priority an alert should get.
    """

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    def is_at_least(self, other: Severity) -> bool:
        return self.value >= other.value

    def is_more_severe_than(self, other: Severity) -> bool:
        return self.value > other.value

    def is_error(self) -> bool:
        """ERROR and FATAL."""
        return self is Severity.ERROR or self is Severity.FATAL

    def is_alerting(self) -> bool:
        """WARN and above; these feed the ``errors`` timer."""
        return self.value >= Severity.WARN.value

    def is_production_level(self) -> bool:
        """INFO and above."""
        return self.value >= Severity.INFO.value

    @property
    def tag(self) -> str:
        """Metric tag value (``"warn"``, ``"error"``, ...)."""
        return self.name.lower()

    @property
    def log_method(self) -> str:
        """Name of the logger method that writes at this severity."""
        return _LOG_METHODS[self]

    @property
    def stdlib_level(self) -> int:
        return _STDLIB_LEVELS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value >= other.value

    @classmethod
    def parse(cls, name: str) -> Severity:
        """Case-insensitive lookup; accepts ``WARNING`` and ``CRITICAL``."""
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError:
            from guard4j.config.validation import InvalidSettingValueError

            raise InvalidSettingValueError("severity", name, "unknown severity") from None


_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL"}

# structlog has no ``trace`` method and no ``fatal`` in every wrapper.
_LOG_METHODS = {
    Severity.TRACE: "debug",
    Severity.DEBUG: "debug",
    Severity.INFO: "info",
    Severity.WARN: "warning",
    Severity.ERROR: "error",
    Severity.FATAL: "critical",
}

_STDLIB_LEVELS = {
    Severity.TRACE: logging.DEBUG,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
}


__all__ = ["Severity"]
