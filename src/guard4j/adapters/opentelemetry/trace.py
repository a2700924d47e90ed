"""OpenTelemetry adapter – trace id of the active span as a context source."""
from __future__ import annotations

from opentelemetry import trace


def otel_trace_id() -> str | None:
    """32-hex trace id of the current span, or ``None`` outside a valid span."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return None
    return format(ctx.trace_id, "032x")


def otel_span_id() -> str | None:
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return None
    return format(ctx.span_id, "016x")


__all__ = ["otel_span_id", "otel_trace_id"]
