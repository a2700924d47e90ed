"""Observability – EventConfig, EventCatalog and BusinessEvent.

Applications that prefer a static catalog over one class per event declare
an enum::

    class OrderEvents(EventCatalog):
        ORDER_PLACED = Severity.INFO
        ORDER_REJECTED = Severity.WARN
        CART_VIEWED = (Severity.DEBUG, False)

    events.emit(BusinessEvent(OrderEvents.ORDER_PLACED), Severity.INFO)

The type name is the member name, lowercased and hyphenated
(``order-placed``). The second value turns metrics off for that event;
its log record is still written.
"""
from __future__ import annotations

import dataclasses
import enum
from typing import Protocol, runtime_checkable

from guard4j.observability.events.event import ObservableEvent
from guard4j.observability.severity import Severity


@runtime_checkable
class EventConfig(Protocol):
    """Static description of an event type."""

    @property
    def event_type(self) -> str: ...

    @property
    def severity(self) -> Severity: ...

    @property
    def has_metrics(self) -> bool: ...


class EventCatalog(enum.Enum):
    """Enum base whose members satisfy :class:`EventConfig`."""

    severity: Severity
    has_metrics: bool

    def __new__(cls, severity: Severity, has_metrics: bool = True) -> EventCatalog:
        member = object.__new__(cls)
        # members sharing a severity must stay distinct
        member._value_ = len(cls.__members__) + 1
        member.severity = severity
        member.has_metrics = has_metrics
        return member

    @property
    def event_type(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclasses.dataclass(frozen=True)
class BusinessEvent(ObservableEvent):
    """Observable event backed by any :class:`EventConfig`.

    Subclass it to carry domain fields alongside the config.
    """

    config: EventConfig

    def event_type(self) -> str:
        return self.config.event_type

    @property
    def severity(self) -> Severity:
        return self.config.severity

    @property
    def has_metrics(self) -> bool:
        return self.config.has_metrics


__all__ = ["BusinessEvent", "EventCatalog", "EventConfig"]
