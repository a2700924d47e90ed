"""Observability – Emitter and ProcessorHandle.

Usage::

    events = guard4j.get_emitter(PaymentService)

    class PaymentService:
        def charge(self, payment: Payment) -> None:
            ...
            events.info(PaymentProcessedEvent(payment.id, payment.amount))
"""
from __future__ import annotations

from guard4j.kernel.errors import CallerContractViolation
from guard4j.observability.events import SupportsObservability
from guard4j.observability.processor.ports import ObservabilityProcessor
from guard4j.observability.severity import Severity


class ProcessorHandle:
    """Swappable cell holding the active processor.

    Emitters keep the handle, not the processor, so emitters created before
    the host finishes wiring route correctly once a processor is installed.
    """

    __slots__ = ("_processor",)

    def __init__(self, processor: ObservabilityProcessor | None = None) -> None:
        self._processor = processor

    def get(self) -> ObservabilityProcessor | None:
        return self._processor

    def set(self, processor: ObservabilityProcessor | None) -> None:
        self._processor = processor


class Emitter:
    """Per-scope handle with severity-leveled emission methods.

    Stateless beyond its scope; safe to share between threads. Emitting with
    no processor installed does nothing.
    """

    __slots__ = ("_scope", "_handle")

    def __init__(self, scope: str, handle: ProcessorHandle) -> None:
        self._scope = scope
        self._handle = handle

    @property
    def scope(self) -> str:
        return self._scope

    def trace(self, event: SupportsObservability) -> None:
        self.emit(event, Severity.TRACE)

    def debug(self, event: SupportsObservability) -> None:
        self.emit(event, Severity.DEBUG)

    def info(self, event: SupportsObservability) -> None:
        self.emit(event, Severity.INFO)

    def warn(self, event: SupportsObservability) -> None:
        self.emit(event, Severity.WARN)

    warning = warn

    def error(self, event: SupportsObservability) -> None:
        self.emit(event, Severity.ERROR)

    def fatal(self, event: SupportsObservability) -> None:
        self.emit(event, Severity.FATAL)

    def emit(self, event: SupportsObservability, severity: Severity) -> None:
        if event is None:
            raise CallerContractViolation("Event cannot be None")
        processor = self._handle.get()
        if processor is not None:
            processor.process_with_level(event, severity, self._scope)

    def __repr__(self) -> str:
        return f"Emitter(scope={self._scope!r})"


__all__ = ["Emitter", "ProcessorHandle"]
