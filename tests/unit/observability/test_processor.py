"""Unit tests for DefaultObservabilityProcessor."""

from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterator

import pytest
import structlog
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from structlog.testing import LogCapture

from guard4j.config import ConfigError
from guard4j.config.settings.observability import ObservabilitySettings
from guard4j.observability.context import (
    ContextConfig,
    ContextResolver,
    CustomField,
    DefaultContextResolver,
    DiagnosticContext,
    MappingInboundRequest,
    RequestContextHolder,
)
from guard4j.observability.events import BusinessEvent, EventCatalog, ObservableEvent
from guard4j.observability.metrics import Counter, Histogram, Metrics
from guard4j.observability.processor import (
    APP_KEY,
    EVENT_LEVEL_KEY,
    EVENT_METRIC_KEY,
    EVENT_TIMESTAMP_KEY,
    EVENT_TYPE_KEY,
    DefaultObservabilityProcessor,
    resolve_metrics_prefix,
)
from guard4j.observability.severity import Severity
from guard4j.testing import FakeMetricsRegistry


# ---------------------------------------------------------------------------
# Events and helpers
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class PaymentProcessedEvent(ObservableEvent):
    payment_id: str = "pay-1"


@dataclasses.dataclass(frozen=True)
class WeightedEvent(ObservableEvent):
    weight: int = 1

    def metric(self) -> int:
        return self.weight


@dataclasses.dataclass(frozen=True)
class BrokenTypeEvent(ObservableEvent):
    def event_type(self) -> str:
        raise RuntimeError("no type")


class CheckoutEvents(EventCatalog):
    ORDER_PLACED = Severity.INFO
    CART_VIEWED = (Severity.WARN, False)


class _ExplodingMetrics(Metrics):
    def counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        raise RuntimeError("registry down")

    def histogram(self, name: str, description: str = "", unit: str = "ms") -> Histogram:
        raise RuntimeError("registry down")


class _ExplodingResolver(ContextResolver):
    def extract_context(self) -> dict[str, str]:
        raise RuntimeError("resolver down")

    def extract_trace_id(self) -> str | None:
        return None

    def extract_user_id(self) -> str | None:
        return None

    def extract_correlation_id(self) -> str | None:
        return None


def _processor(
    metrics: Metrics | None = None, **overrides: Any
) -> DefaultObservabilityProcessor:
    resolver = overrides.pop("context_resolver", None)
    return DefaultObservabilityProcessor(
        ObservabilitySettings(**overrides),
        metrics if metrics is not None else FakeMetricsRegistry(),
        context_resolver=resolver,
    )


def _event_records(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [e for e in entries if str(e.get("event", "")).startswith("guard4j event:")]


def _staged_keys() -> set[str]:
    return {k for k in DiagnosticContext.snapshot() if k.startswith("guard4j.")}


@pytest.fixture
def metrics() -> FakeMetricsRegistry:
    return FakeMetricsRegistry()


# ===========================================================================
# Metrics
# ===========================================================================


class TestEventCounter:
    def test_info_increments_counter_with_tags(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        metrics.assert_counter_total(
            "guard4j.events", 1, event_type="payment-processed-event", level="info"
        )

    def test_counter_accumulates(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        for _ in range(3):
            processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert metrics.counter_total("guard4j.events", event_type="payment-processed-event", level="info") == 3

    def test_levels_are_tagged_separately(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        processor.process_with_level(PaymentProcessedEvent(), Severity.WARN, "svc")
        assert metrics.counter_total("guard4j.events", event_type="payment-processed-event", level="info") == 1
        assert metrics.counter_total("guard4j.events", event_type="payment-processed-event", level="warn") == 1

    def test_zero_weight_event_still_counted_by_weight(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        processor.process_with_level(WeightedEvent(weight=0), Severity.INFO, "svc")
        assert metrics.has_counter("guard4j.events")
        assert metrics.counter_total("guard4j.events") == 0

    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(weight=st.integers(min_value=0, max_value=10_000))
    def test_counter_increment_equals_metric(self, weight: int) -> None:
        metrics = FakeMetricsRegistry()
        processor = _processor(metrics, logging_enabled=False)
        processor.process_with_level(WeightedEvent(weight=weight), Severity.INFO, "svc")
        assert metrics.counter_total("guard4j.events", event_type="weighted-event", level="info") == weight


class TestCatalogEvents:
    def test_catalog_event_counted_under_member_name(self, metrics: FakeMetricsRegistry) -> None:
        _processor(metrics).process_with_level(BusinessEvent(CheckoutEvents.ORDER_PLACED), Severity.INFO, "svc")
        assert metrics.counter_total("guard4j.events", event_type="order-placed", level="info") == 1

    def test_metrics_off_for_event_still_logs(
        self, metrics: FakeMetricsRegistry, captured_logs: list[dict[str, Any]]
    ) -> None:
        _processor(metrics).process_with_level(BusinessEvent(CheckoutEvents.CART_VIEWED), Severity.WARN, "svc")
        assert not metrics.has_counter("guard4j.events")
        assert not metrics.has_histogram("guard4j.errors")
        (record,) = _event_records(captured_logs)
        assert record[EVENT_TYPE_KEY] == "cart-viewed"


class TestErrorTimer:
    @pytest.mark.parametrize("severity", [Severity.WARN, Severity.ERROR, Severity.FATAL])
    def test_alerting_levels_record_one_occurrence(
        self, metrics: FakeMetricsRegistry, severity: Severity
    ) -> None:
        processor = _processor(metrics)
        processor.process_with_level(PaymentProcessedEvent(), severity, "svc")
        assert metrics.histogram_count(
            "guard4j.errors", event_type="payment-processed-event", level=severity.tag
        ) == 1

    @pytest.mark.parametrize("severity", [Severity.TRACE, Severity.DEBUG, Severity.INFO])
    def test_non_alerting_levels_skip_timer(
        self, metrics: FakeMetricsRegistry, severity: Severity
    ) -> None:
        processor = _processor(metrics)
        processor.process_with_level(PaymentProcessedEvent(), severity, "svc")
        assert not metrics.has_histogram("guard4j.errors")
        assert metrics.counter_total("guard4j.events", level=severity.tag, event_type="payment-processed-event") == 1

    def test_occurrence_is_zero_duration(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        processor.process_with_level(PaymentProcessedEvent(), Severity.ERROR, "svc")
        assert metrics.histogram("guard4j.errors").values == [0.0]


class TestMetricsPrefix:
    def test_explicit_prefix(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics, metrics_prefix="custom", application_name="my-service")
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert processor.metrics_prefix == "custom"
        assert metrics.has_counter("custom.events")

    def test_application_name_when_no_prefix(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics, application_name="my-service")
        processor.process_with_level(PaymentProcessedEvent(), Severity.WARN, "svc")
        assert metrics.has_counter("my-service.events")
        assert metrics.has_histogram("my-service.errors")

    def test_generic_application_name_falls_back(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics, application_name="application")
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert metrics.has_counter("guard4j.events")

    def test_blank_prefix_ignored(self) -> None:
        processor = _processor(metrics_prefix="   ", application_name="orders")
        assert processor.metrics_prefix == "orders"

    def test_application_name_argument_overrides_settings(self) -> None:
        processor = DefaultObservabilityProcessor(
            ObservabilitySettings(application_name="from-settings"),
            FakeMetricsRegistry(),
            application_name="from-host",
        )
        assert processor.metrics_prefix == "from-host"
        assert processor.application_name == "from-host"

    @pytest.mark.parametrize(
        ("configured", "app", "expected"),
        [
            ("custom", "my-service", "custom"),
            ("  padded  ", None, "padded"),
            (None, "my-service", "my-service"),
            ("", " my-service ", "my-service"),
            (None, "application", "guard4j"),
            (None, "   ", "guard4j"),
            (None, None, "guard4j"),
        ],
    )
    def test_resolution_order(self, configured: str | None, app: str | None, expected: str) -> None:
        assert resolve_metrics_prefix(configured, app) == expected


class TestInstrumentCache:
    def test_counter_registered_once(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        for _ in range(5):
            processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert metrics.registrations == 1

    def test_counter_and_timer_registered_once(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        for _ in range(5):
            processor.process_with_level(PaymentProcessedEvent(), Severity.ERROR, "svc")
        assert metrics.registrations == 2

    def test_new_tag_combination_registers(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics)
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        processor.process_with_level(WeightedEvent(), Severity.INFO, "svc")
        processor.process_with_level(WeightedEvent(), Severity.DEBUG, "svc")
        assert metrics.registrations == 3

    def test_concurrent_first_use_registers_once(self, metrics: FakeMetricsRegistry) -> None:
        processor = _processor(metrics, logging_enabled=False)
        with ThreadPoolExecutor(max_workers=8) as pool:
            for _ in range(64):
                pool.submit(processor.process_with_level, PaymentProcessedEvent(), Severity.INFO, "svc")
        assert metrics.registrations == 1


# ===========================================================================
# Logging
# ===========================================================================


class TestLogRecord:
    def test_one_record_with_message(self, captured_logs: list[dict[str, Any]]) -> None:
        _processor().process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        records = _event_records(captured_logs)
        assert len(records) == 1
        assert records[0]["event"] == "guard4j event: payment-processed-event at level INFO"
        assert records[0]["log_level"] == "info"

    @pytest.mark.parametrize(
        ("severity", "method"),
        [
            (Severity.TRACE, "debug"),
            (Severity.DEBUG, "debug"),
            (Severity.WARN, "warning"),
            (Severity.ERROR, "error"),
            (Severity.FATAL, "critical"),
        ],
    )
    def test_written_at_event_severity(
        self, captured_logs: list[dict[str, Any]], severity: Severity, method: str
    ) -> None:
        _processor().process_with_level(PaymentProcessedEvent(), severity, "svc")
        (record,) = _event_records(captured_logs)
        assert record["log_level"] == method
        assert record["event"].endswith(f"at level {severity.name}")

    def test_annotations_present_during_record(self, captured_logs: list[dict[str, Any]]) -> None:
        event = WeightedEvent(weight=7)
        _processor(application_name="my-service").process_with_level(event, Severity.WARN, "svc")
        (record,) = _event_records(captured_logs)
        assert record[APP_KEY] == "my-service"
        assert record[EVENT_TYPE_KEY] == "weighted-event"
        assert record[EVENT_LEVEL_KEY] == "WARN"
        assert record[EVENT_TIMESTAMP_KEY] == event.timestamp().isoformat()
        assert record[EVENT_METRIC_KEY] == "7"

    @pytest.mark.parametrize("name", [None, "application", "  "])
    def test_app_key_omitted_without_meaningful_name(
        self, captured_logs: list[dict[str, Any]], name: str | None
    ) -> None:
        _processor(application_name=name).process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        (record,) = _event_records(captured_logs)
        assert APP_KEY not in record
        assert EVENT_TYPE_KEY in record

    def test_annotations_released_after_record(self, captured_logs: list[dict[str, Any]]) -> None:
        _processor(application_name="my-service").process_with_level(PaymentProcessedEvent(), Severity.ERROR, "svc")
        assert _event_records(captured_logs)
        assert _staged_keys() == set()

    def test_previous_values_restored(self, captured_logs: list[dict[str, Any]]) -> None:
        DiagnosticContext.bind(**{EVENT_TYPE_KEY: "outer", "request_id": "r-1"})
        _processor().process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        (record,) = _event_records(captured_logs)
        assert record[EVENT_TYPE_KEY] == "payment-processed-event"
        assert DiagnosticContext.get(EVENT_TYPE_KEY) == "outer"
        assert DiagnosticContext.get("request_id") == "r-1"
        assert DiagnosticContext.get(EVENT_LEVEL_KEY) is None

    def test_diagnostic_context_off_writes_plain_record(self, captured_logs: list[dict[str, Any]]) -> None:
        _processor(include_diagnostic_context=False).process_with_level(
            PaymentProcessedEvent(), Severity.INFO, "svc"
        )
        (record,) = _event_records(captured_logs)
        assert EVENT_TYPE_KEY not in record

    def test_logging_disabled(self, captured_logs: list[dict[str, Any]], metrics: FakeMetricsRegistry) -> None:
        _processor(metrics, logging_enabled=False).process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert _event_records(captured_logs) == []
        assert metrics.counter_total("guard4j.events") == 1

    def test_metrics_disabled_needs_no_backend(self, captured_logs: list[dict[str, Any]]) -> None:
        processor = DefaultObservabilityProcessor(ObservabilitySettings(metrics_enabled=False))
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert len(_event_records(captured_logs)) == 1

    def test_logger_named_after_scope_and_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        names: list[str] = []
        real_get_logger = structlog.get_logger

        def spy(*args: Any, **kwargs: Any) -> Any:
            names.append(args[0])
            return real_get_logger(*args, **kwargs)

        monkeypatch.setattr(structlog, "get_logger", spy)
        processor = _processor(logging_enabled=True)
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "app.PaymentService")
        processor.process_with_level(PaymentProcessedEvent(), Severity.WARN, "app.PaymentService")
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "app.OrderService")
        assert names == ["app.PaymentService", "app.OrderService"]


class TestContextEnrichment:
    def test_resolved_fields_staged_under_context_prefix(self, captured_logs: list[dict[str, Any]]) -> None:
        resolver = DefaultContextResolver(
            ContextConfig(custom_fields=(CustomField.parse("tenant=header:X-Tenant-Id"),))
        )
        DiagnosticContext.bind(traceId="t-1")
        request = MappingInboundRequest(headers={"X-Correlation-ID": "c-1", "X-Tenant-Id": "acme"})
        with RequestContextHolder.bind(request):
            _processor(context_resolver=resolver).process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        (record,) = _event_records(captured_logs)
        assert record["guard4j.context.traceId"] == "t-1"
        assert record["guard4j.context.correlationId"] == "c-1"
        assert record["guard4j.context.tenant"] == "acme"
        assert "guard4j.context.userId" not in record
        assert _staged_keys() == set()
        assert DiagnosticContext.get("traceId") == "t-1"

    def test_failing_resolver_still_logs(self, captured_logs: list[dict[str, Any]]) -> None:
        _processor(context_resolver=_ExplodingResolver()).process_with_level(
            PaymentProcessedEvent(), Severity.INFO, "svc"
        )
        (record,) = _event_records(captured_logs)
        assert not any(k.startswith("guard4j.context.") for k in record)

    def test_set_context_resolver(self, captured_logs: list[dict[str, Any]]) -> None:
        processor = _processor()
        assert processor.context_resolver is None
        processor.set_context_resolver(DefaultContextResolver())
        DiagnosticContext.bind(trace_id="t-9")
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        processor.set_context_resolver(None)
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        first, second = _event_records(captured_logs)
        assert first["guard4j.context.traceId"] == "t-9"
        assert "guard4j.context.traceId" not in second


# ===========================================================================
# process() and failure handling
# ===========================================================================


class TestProcess:
    def test_defaults_to_info(self, captured_logs: list[dict[str, Any]], metrics: FakeMetricsRegistry) -> None:
        _processor(metrics).process(PaymentProcessedEvent())
        (record,) = _event_records(captured_logs)
        assert record["log_level"] == "info"
        assert metrics.counter_total("guard4j.events", event_type="payment-processed-event", level="info") == 1

    def test_scope_derived_from_event_type(self, monkeypatch: pytest.MonkeyPatch) -> None:
        processor = _processor()
        seen: list[tuple[Severity, str]] = []
        monkeypatch.setattr(
            processor, "process_with_level", lambda event, severity, scope: seen.append((severity, scope))
        )
        processor.process(PaymentProcessedEvent())
        assert seen == [(Severity.INFO, "guard4j.events.payment-processed-event")]


@pytest.fixture
def failing_logs() -> Iterator[dict[str, Any]]:
    """structlog pipeline that fails on event records; remembers their context."""
    seen: dict[str, Any] = {}
    capture = LogCapture()

    def explode(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        if str(event_dict.get("event", "")).startswith("guard4j event:"):
            seen.update(event_dict)
            raise RuntimeError("log backend down")
        return event_dict

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, explode, capture],
        cache_logger_on_first_use=False,
    )
    seen["_capture"] = capture.entries
    yield seen
    structlog.reset_defaults()


class TestFailureIsolation:
    def test_metrics_failure_is_absorbed_and_reported(self, captured_logs: list[dict[str, Any]]) -> None:
        processor = _processor(_ExplodingMetrics())
        processor.process_with_level(PaymentProcessedEvent(), Severity.ERROR, "svc")
        warnings = [e for e in captured_logs if e["event"] == "observability_event_failed"]
        assert len(warnings) == 1
        assert warnings[0]["log_level"] == "warning"
        assert warnings[0]["stage"] == "metrics"
        assert warnings[0]["event_type"] == "payment-processed-event"

    def test_logging_failure_releases_staged_keys(self, failing_logs: dict[str, Any]) -> None:
        _processor(application_name="my-service").process_with_level(
            PaymentProcessedEvent(), Severity.INFO, "svc"
        )
        assert failing_logs[EVENT_TYPE_KEY] == "payment-processed-event"
        assert _staged_keys() == set()
        (warning,) = [e for e in failing_logs["_capture"] if e["event"] == "observability_event_failed"]
        assert warning["stage"] == "logging"

    def test_broken_event_type_is_absorbed(self, captured_logs: list[dict[str, Any]]) -> None:
        processor = _processor()
        processor.process(BrokenTypeEvent())
        processor.process_with_level(BrokenTypeEvent(), Severity.ERROR, "svc")
        warnings = [e for e in captured_logs if e["event"] == "observability_event_failed"]
        assert len(warnings) == 2
        assert _event_records(captured_logs) == []

    def test_reporting_falls_back_to_stdlib(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        class _Broken:
            def warning(self, *args: Any, **kwargs: Any) -> None:
                raise RuntimeError("structlog down")

        monkeypatch.setattr("guard4j.observability.processor.default._log", _Broken())
        processor = _processor(_ExplodingMetrics(), logging_enabled=False)
        with caplog.at_level(logging.WARNING, logger="guard4j.observability.processor.default"):
            processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert "observability_event_failed" in caplog.text


# ===========================================================================
# Construction
# ===========================================================================


class TestConstruction:
    def test_metrics_enabled_without_backend_rejected(self) -> None:
        with pytest.raises(ConfigError):
            DefaultObservabilityProcessor(ObservabilitySettings())

    def test_defaults_require_backend(self) -> None:
        with pytest.raises(ConfigError):
            DefaultObservabilityProcessor()

    def test_whitespace_prefix_rejected_by_settings(self) -> None:
        with pytest.raises(ConfigError):
            ObservabilitySettings(metrics_prefix="my prefix")

    def test_spaced_application_name_used_as_prefix(self, metrics: FakeMetricsRegistry) -> None:
        processor = DefaultObservabilityProcessor(
            ObservabilitySettings(), metrics, application_name="Order Service"
        )
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        assert processor.metrics_prefix == "Order Service"
        assert metrics.counter_total(
            "Order Service.events", event_type="payment-processed-event", level="info"
        ) == 1

    def test_logging_only_processor_accepts_spaced_application_name(
        self, captured_logs: list[dict[str, Any]]
    ) -> None:
        processor = DefaultObservabilityProcessor(
            ObservabilitySettings(metrics_enabled=False), application_name="Order Service"
        )
        processor.process_with_level(PaymentProcessedEvent(), Severity.INFO, "svc")
        (record,) = _event_records(captured_logs)
        assert record[APP_KEY] == "Order Service"

    def test_whitespace_application_name_fine_with_explicit_prefix(self) -> None:
        processor = DefaultObservabilityProcessor(
            ObservabilitySettings(metrics_prefix="orders"),
            FakeMetricsRegistry(),
            application_name="my service",
        )
        assert processor.metrics_prefix == "orders"
