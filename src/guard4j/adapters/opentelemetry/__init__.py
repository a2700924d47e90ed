"""OpenTelemetry adapter – metrics backend and trace-id source."""
from guard4j.adapters.opentelemetry.metrics import OtelMetrics
from guard4j.adapters.opentelemetry.trace import otel_span_id, otel_trace_id

__all__ = ["OtelMetrics", "otel_span_id", "otel_trace_id"]
