"""Testing fakes – in-memory doubles for guard4j ports."""
from guard4j.testing.fakes.metrics import FakeMetricsRegistry
from guard4j.testing.fakes.processor import RecordingProcessor

__all__ = ["FakeMetricsRegistry", "RecordingProcessor"]
