"""Testing utilities for code that emits guard4j events."""
from guard4j.testing.fakes import FakeMetricsRegistry, RecordingProcessor

__all__ = ["FakeMetricsRegistry", "RecordingProcessor"]
