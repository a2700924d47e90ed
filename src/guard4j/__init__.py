"""
guard4j – observable events turned into metrics and context-enriched logs.

Import path convention::

    from guard4j import ObservableEvent, get_emitter
    from guard4j.bootstrap import configure_observability
    from guard4j.observability.context import ContextConfig, CustomField
    from guard4j.testing import FakeMetricsRegistry
"""

from guard4j.observability import (
    BusinessEvent,
    ContextConfig,
    CustomField,
    DefaultObservabilityProcessor,
    Emitter,
    EmitterRegistry,
    EventCatalog,
    FieldSource,
    JsonLoggerFactory,
    ObservabilityProcessor,
    ObservableEvent,
    Severity,
    get_emitter,
    set_processor,
)
from guard4j.config.settings.observability import ObservabilitySettings

__version__ = "0.1.0"
__all__ = [
    "BusinessEvent",
    "ContextConfig",
    "CustomField",
    "DefaultObservabilityProcessor",
    "Emitter",
    "EmitterRegistry",
    "EventCatalog",
    "FieldSource",
    "JsonLoggerFactory",
    "ObservabilityProcessor",
    "ObservabilitySettings",
    "ObservableEvent",
    "Severity",
    "__version__",
    "get_emitter",
    "set_processor",
]
