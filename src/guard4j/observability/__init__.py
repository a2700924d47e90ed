"""Observability – events, severity, context resolution, processor, emitters."""

from guard4j.observability.context import (
    ContextConfig,
    ContextResolver,
    CustomField,
    DefaultContextResolver,
    DiagnosticContext,
    FieldSource,
    RequestContextHolder,
)
from guard4j.observability.emitter import Emitter, EmitterRegistry, get_emitter, set_processor
from guard4j.observability.events import (
    BusinessEvent,
    CoreEvents,
    EventCatalog,
    EventConfig,
    ObservableEvent,
)
from guard4j.observability.logging import JsonLoggerFactory, get_logger
from guard4j.observability.metrics import Counter, Histogram, Metrics, NoopMetrics
from guard4j.observability.processor import DefaultObservabilityProcessor, ObservabilityProcessor
from guard4j.observability.severity import Severity

__all__ = [
    "BusinessEvent",
    "ContextConfig",
    "ContextResolver",
    "CoreEvents",
    "Counter",
    "CustomField",
    "DefaultContextResolver",
    "DefaultObservabilityProcessor",
    "DiagnosticContext",
    "Emitter",
    "EmitterRegistry",
    "EventCatalog",
    "EventConfig",
    "FieldSource",
    "Histogram",
    "JsonLoggerFactory",
    "Metrics",
    "NoopMetrics",
    "ObservabilityProcessor",
    "ObservableEvent",
    "RequestContextHolder",
    "Severity",
    "get_emitter",
    "get_logger",
    "set_processor",
]
