"""Observability – ObservabilityProcessor port."""
from __future__ import annotations

import abc

from guard4j.observability.context.resolver import ContextResolver
from guard4j.observability.events import SupportsObservability
from guard4j.observability.severity import Severity


class ObservabilityProcessor(abc.ABC):
    """Turns one event into metric updates and a log record."""

    @abc.abstractmethod
    def process(self, event: SupportsObservability) -> None:
        """Process at INFO with a scope derived from the event type."""

    @abc.abstractmethod
    def process_with_level(self, event: SupportsObservability, severity: Severity, scope: str) -> None:
        """Process *event* at *severity*, logging through the logger named *scope*."""

    def set_context_resolver(self, resolver: ContextResolver | None) -> None:  # noqa: B027
        """Install context enrichment; ``None`` disables it."""


__all__ = ["ObservabilityProcessor"]
