"""Observability – DefaultObservabilityProcessor.

The one place where an event becomes observable output:

* counter ``<prefix>.events{event_type, level}`` incremented by
  ``event.metric()``;
* for WARN and above, timer ``<prefix>.errors{event_type, level}`` records a
  zero-duration occurrence, so dashboards get an error rate from timer
  infrastructure;
* one log record through the logger named after the emitting scope, with
  the event and its resolved context staged in the diagnostic context for
  exactly that record.

Backend failures never reach the caller; they are reported once at WARNING
through this module's logger.
"""
from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Callable, Generic, TypeVar

import structlog

from guard4j.config.settings.observability import ObservabilitySettings
from guard4j.config.validation import ConfigError
from guard4j.kernel.errors import ObservabilityFailure
from guard4j.observability.context.diagnostic import DiagnosticContext
from guard4j.observability.context.resolver import ContextResolver
from guard4j.observability.events import SupportsObservability
from guard4j.observability.metrics import Counter, Histogram, Metrics, NoopMetrics
from guard4j.observability.processor.ports import ObservabilityProcessor
from guard4j.observability.severity import Severity

FALLBACK_METRICS_PREFIX = "guard4j"
GENERIC_APPLICATION_NAMES = frozenset({"application"})
LEGACY_SCOPE_PREFIX = "guard4j.events."
LOG_MESSAGE = "guard4j event: %s at level %s"

APP_KEY = "guard4j.app"
EVENT_TYPE_KEY = "guard4j.event.type"
EVENT_LEVEL_KEY = "guard4j.event.level"
EVENT_TIMESTAMP_KEY = "guard4j.event.timestamp"
EVENT_METRIC_KEY = "guard4j.event.metric"
CONTEXT_KEY_PREFIX = "guard4j.context."

_log = structlog.get_logger(__name__)

K = TypeVar("K")
V = TypeVar("V")


def is_meaningful_application_name(name: str | None) -> bool:
    return bool(name and name.strip()) and name.strip() not in GENERIC_APPLICATION_NAMES  # type: ignore[union-attr]


def resolve_metrics_prefix(configured: str | None, application_name: str | None) -> str:
    """Configured prefix, else a meaningful application name, else ``guard4j``."""
    if configured is not None and configured.strip():
        return configured.strip()
    if is_meaningful_application_name(application_name):
        return application_name.strip()  # type: ignore[union-attr]
    return FALLBACK_METRICS_PREFIX


@dataclasses.dataclass(frozen=True)
class _TaggedCounter:
    counter: Counter
    labels: dict[str, str]

    def increment(self, amount: float) -> None:
        self.counter.add(amount, labels=self.labels)


@dataclasses.dataclass(frozen=True)
class _TaggedTimer:
    histogram: Histogram
    labels: dict[str, str]

    def record_occurrence(self) -> None:
        self.histogram.record(0.0, labels=self.labels)


class _Cache(Generic[K, V]):
    """Grow-only map with atomic get-or-create."""

    def __init__(self) -> None:
        self._items: dict[K, V] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._items)

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        value = self._items.get(key)
        if value is not None:
            return value
        with self._lock:
            value = self._items.get(key)
            if value is None:
                value = factory()
                self._items[key] = value
            return value


class DefaultObservabilityProcessor(ObservabilityProcessor):
    """Metrics + structured logging for observable events.

    Parameters
    ----------
    settings:
        Enable flags and metric prefix. Defaults to :class:`ObservabilitySettings`.
    metrics:
        Metrics backend; required when metrics are enabled.
    application_name:
        Host application name; overrides ``settings.application_name``.
    context_resolver:
        Optional context enrichment for log records.

    Raises
    ------
    ConfigError
        When metrics are enabled but no metrics backend is given.
    """

    def __init__(
        self,
        settings: ObservabilitySettings | None = None,
        metrics: Metrics | None = None,
        *,
        application_name: str | None = None,
        context_resolver: ContextResolver | None = None,
    ) -> None:
        self._settings = settings or ObservabilitySettings()
        if self._settings.metrics_enabled and metrics is None:
            raise ConfigError(
                "metrics_enabled is set but no metrics backend was provided",
                setting_name="metrics_enabled",
            )
        self._metrics: Metrics = metrics if metrics is not None else NoopMetrics()
        self._application_name = (
            application_name if application_name is not None else self._settings.application_name
        )
        self._prefix = resolve_metrics_prefix(self._settings.metrics_prefix, self._application_name)
        self._events_metric = f"{self._prefix}.events"
        self._errors_metric = f"{self._prefix}.errors"
        self._resolver = context_resolver
        self._counters: _Cache[tuple[str, str, str], _TaggedCounter] = _Cache()
        self._timers: _Cache[tuple[str, str, str], _TaggedTimer] = _Cache()
        self._loggers: _Cache[str, Any] = _Cache()

    @property
    def metrics_prefix(self) -> str:
        return self._prefix

    @property
    def application_name(self) -> str | None:
        return self._application_name

    @property
    def context_resolver(self) -> ContextResolver | None:
        return self._resolver

    def set_context_resolver(self, resolver: ContextResolver | None) -> None:
        self._resolver = resolver
        _log.debug("context_resolver_changed", enabled=resolver is not None)

    # ------------------------------------------------------------------
    # ObservabilityProcessor
    # ------------------------------------------------------------------

    def process(self, event: SupportsObservability) -> None:
        try:
            scope = f"{LEGACY_SCOPE_PREFIX}{event.event_type()}"
        except Exception as exc:  # noqa: BLE001
            self._report(ObservabilityFailure("process", cause=exc))
            return
        self.process_with_level(event, Severity.INFO, scope)

    def process_with_level(self, event: SupportsObservability, severity: Severity, scope: str) -> None:
        try:
            if self._settings.metrics_enabled and getattr(event, "has_metrics", True):
                self._record_metrics(event, severity)
            if self._settings.logging_enabled:
                self._write_log(event, severity, scope)
        except ObservabilityFailure as failure:
            self._report(failure)
        except Exception as exc:  # noqa: BLE001
            self._report(ObservabilityFailure("process", cause=exc))

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def _record_metrics(self, event: SupportsObservability, severity: Severity) -> None:
        event_type = event.event_type()
        try:
            self._counter(self._events_metric, event_type, severity).increment(event.metric())
            if severity.is_alerting():
                self._timer(self._errors_metric, event_type, severity).record_occurrence()
        except Exception as exc:
            raise ObservabilityFailure("metrics", event_type, cause=exc) from exc

    def _counter(self, name: str, event_type: str, severity: Severity) -> _TaggedCounter:
        metrics = self._metrics
        return self._counters.get_or_create(
            (name, event_type, severity.tag),
            lambda: _TaggedCounter(
                metrics.counter(name, description="guard4j event counter"),
                {"event_type": event_type, "level": severity.tag},
            ),
        )

    def _timer(self, name: str, event_type: str, severity: Severity) -> _TaggedTimer:
        metrics = self._metrics
        return self._timers.get_or_create(
            (name, event_type, severity.tag),
            lambda: _TaggedTimer(
                metrics.histogram(name, description="guard4j error timer", unit="ms"),
                {"event_type": event_type, "level": severity.tag},
            ),
        )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def _write_log(self, event: SupportsObservability, severity: Severity, scope: str) -> None:
        event_type = event.event_type()
        logger = self._loggers.get_or_create(scope, lambda: structlog.get_logger(scope))
        if not self._settings.include_diagnostic_context:
            self._log_event(logger, event_type, severity)
            return

        annotations = self._annotations(event, event_type, severity)
        with DiagnosticContext.staged(annotations):
            self._log_event(logger, event_type, severity)

    def _annotations(self, event: SupportsObservability, event_type: str, severity: Severity) -> dict[str, str]:
        annotations: dict[str, str] = {}
        if is_meaningful_application_name(self._application_name):
            annotations[APP_KEY] = self._application_name.strip()  # type: ignore[union-attr]
        annotations[EVENT_TYPE_KEY] = event_type
        annotations[EVENT_LEVEL_KEY] = severity.name
        annotations[EVENT_TIMESTAMP_KEY] = event.timestamp().isoformat()
        annotations[EVENT_METRIC_KEY] = str(event.metric())
        for key, value in self._resolve_context().items():
            annotations[f"{CONTEXT_KEY_PREFIX}{key}"] = value
        return annotations

    def _resolve_context(self) -> dict[str, str]:
        if self._resolver is None:
            return {}
        try:
            return self._resolver.extract_context()
        except Exception as exc:  # noqa: BLE001
            _log.debug("context_extraction_failed", error=str(exc))
            return {}

    @staticmethod
    def _log_event(logger: Any, event_type: str, severity: Severity) -> None:
        try:
            getattr(logger, severity.log_method)(LOG_MESSAGE, event_type, severity.name)
        except Exception as exc:
            raise ObservabilityFailure("logging", event_type, cause=exc) from exc

    @staticmethod
    def _report(failure: ObservabilityFailure) -> None:
        try:
            _log.warning("observability_event_failed", exc_info=failure.cause, **failure.to_dict())
        except Exception:  # noqa: BLE001
            logging.getLogger(__name__).warning("observability_event_failed: %s", failure.to_dict())


__all__ = [
    "DefaultObservabilityProcessor",
    "FALLBACK_METRICS_PREFIX",
    "resolve_metrics_prefix",
]
