"""OpenTelemetry adapter – OtelMetrics."""
from __future__ import annotations

import threading
from typing import Any

from opentelemetry import metrics

from guard4j.observability.metrics import Counter, Histogram, Metrics


class _OtelCounter(Counter):
    def __init__(self, counter: Any) -> None:
        self._c = counter

    def add(self, value: float = 1.0, labels: dict[str, str] | None = None) -> None:
        self._c.add(value, attributes=labels)


class _OtelHistogram(Histogram):
    def __init__(self, hist: Any) -> None:
        self._h = hist

    def record(self, value: float, labels: dict[str, str] | None = None) -> None:
        self._h.record(value, attributes=labels)


class OtelMetrics(Metrics):
    """OpenTelemetry metrics adapter.

    Instruments are created once per name; without a configured SDK the
    OpenTelemetry API hands out no-op instruments.
    """

    def __init__(self, meter_name: str = "guard4j", meter: Any = None) -> None:
        self._meter = meter if meter is not None else metrics.get_meter(meter_name)
        self._instruments: dict[tuple[str, str], Any] = {}
        self._lock = threading.Lock()

    def _instrument(self, kind: str, name: str, create: Any) -> Any:
        key = (kind, name)
        with self._lock:
            if key not in self._instruments:
                self._instruments[key] = create()
            return self._instruments[key]

    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        return self._instrument(
            "counter",
            name,
            lambda: _OtelCounter(self._meter.create_counter(name, description=description, unit=unit)),
        )

    def histogram(self, name: str, description: str = "", unit: str = "ms") -> Histogram:
        return self._instrument(
            "histogram",
            name,
            lambda: _OtelHistogram(self._meter.create_histogram(name, description=description, unit=unit)),
        )


__all__ = ["OtelMetrics"]
