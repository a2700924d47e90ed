"""Observability – ObservableEvent contract.

An event describes *what happened*; the processor decides how it is
observed. Concrete events are frozen dataclasses::

    @dataclasses.dataclass(frozen=True)
    class PaymentProcessedEvent(ObservableEvent):
        payment_id: str
        amount: Decimal

    PaymentProcessedEvent("pay-1", Decimal("9.99")).event_type()
    # 'payment-processed-event'

The type name is derived once, when the subclass is defined. Pin it with a
class keyword (``class E(ObservableEvent, event_type="test.event")``) or by
overriding :meth:`ObservableEvent.event_type`.
"""
from __future__ import annotations

import dataclasses
import re
from datetime import UTC, datetime
from typing import Any, ClassVar, Protocol, runtime_checkable

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def kebab_case(name: str) -> str:
    """``PaymentProcessedEvent`` -> ``payment-processed-event``."""
    return _CAMEL_BOUNDARY.sub("-", name).replace("_", "-").lower()


@runtime_checkable
class SupportsObservability(Protocol):
    """Anything the processor can observe."""

    def event_type(self) -> str: ...
    def metric(self) -> int: ...
    def timestamp(self) -> datetime: ...


@dataclasses.dataclass(frozen=True, kw_only=True)
class ObservableEvent:
    """Base for events; all three capabilities have defaults."""

    _event_type: ClassVar[str] = "observable-event"

    occurred_at: datetime = dataclasses.field(
        default_factory=lambda: datetime.now(UTC), compare=False
    )

    def __init_subclass__(cls, event_type: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if event_type is not None:
            cls._event_type = event_type
        elif "_event_type" not in cls.__dict__:
            cls._event_type = kebab_case(cls.__name__)

    def event_type(self) -> str:
        return self._event_type

    def metric(self) -> int:
        """Counter weight; ``1`` counts occurrences."""
        return 1

    def timestamp(self) -> datetime:
        return self.occurred_at


__all__ = ["ObservableEvent", "SupportsObservability", "kebab_case"]
