"""Unit tests for NoopMetrics."""

from __future__ import annotations

import dataclasses

from guard4j.config.settings.observability import ObservabilitySettings
from guard4j.observability.events import ObservableEvent
from guard4j.observability.metrics import Counter, Histogram, NoopMetrics
from guard4j.observability.processor import DefaultObservabilityProcessor
from guard4j.observability.severity import Severity


@dataclasses.dataclass(frozen=True)
class CacheEvictedEvent(ObservableEvent):
    pass


class TestNoopMetrics:
    def test_instruments_satisfy_ports(self) -> None:
        metrics = NoopMetrics()
        assert isinstance(metrics.counter("c"), Counter)
        assert isinstance(metrics.histogram("h"), Histogram)

    def test_calls_are_silent(self) -> None:
        metrics = NoopMetrics()
        metrics.counter("c").add(5, labels={"level": "info"})
        metrics.histogram("h").record(0.0)

    def test_usable_as_processor_backend(self) -> None:
        processor = DefaultObservabilityProcessor(ObservabilitySettings(logging_enabled=False), NoopMetrics())
        processor.process_with_level(CacheEvictedEvent(), Severity.ERROR, "cache")
