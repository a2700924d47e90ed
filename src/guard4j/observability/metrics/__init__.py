"""Observability – metrics ports."""
from guard4j.observability.metrics.ports import Counter, Histogram, Metrics
from guard4j.observability.metrics.noop import NoopMetrics

__all__ = ["Counter", "Histogram", "Metrics", "NoopMetrics"]
