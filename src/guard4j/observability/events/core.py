"""Observability – events the library emits about itself."""
from __future__ import annotations

from guard4j.observability.events.business import EventCatalog
from guard4j.observability.severity import Severity


class CoreEvents(EventCatalog):
    GUARD4J_INITIALIZED = Severity.INFO
    HTTP_REQUEST_PROCESSED = Severity.INFO


__all__ = ["CoreEvents"]
