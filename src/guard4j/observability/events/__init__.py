"""Observability – observable events."""
from guard4j.observability.events.business import BusinessEvent, EventCatalog, EventConfig
from guard4j.observability.events.core import CoreEvents
from guard4j.observability.events.event import ObservableEvent, SupportsObservability, kebab_case

__all__ = [
    "BusinessEvent",
    "CoreEvents",
    "EventCatalog",
    "EventConfig",
    "ObservableEvent",
    "SupportsObservability",
    "kebab_case",
]
