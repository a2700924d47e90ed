"""Observability – event processor port and default implementation."""
from guard4j.observability.processor.default import (
    APP_KEY,
    CONTEXT_KEY_PREFIX,
    EVENT_LEVEL_KEY,
    EVENT_METRIC_KEY,
    EVENT_TIMESTAMP_KEY,
    EVENT_TYPE_KEY,
    FALLBACK_METRICS_PREFIX,
    DefaultObservabilityProcessor,
    resolve_metrics_prefix,
)
from guard4j.observability.processor.ports import ObservabilityProcessor

__all__ = [
    "APP_KEY",
    "CONTEXT_KEY_PREFIX",
    "DefaultObservabilityProcessor",
    "EVENT_LEVEL_KEY",
    "EVENT_METRIC_KEY",
    "EVENT_TIMESTAMP_KEY",
    "EVENT_TYPE_KEY",
    "FALLBACK_METRICS_PREFIX",
    "ObservabilityProcessor",
    "resolve_metrics_prefix",
]
