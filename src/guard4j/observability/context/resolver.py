"""Observability – ContextResolver.

Best-effort extraction of correlation data (trace id, user id, correlation
id, custom fields) from sources that may be absent: a background job has no
request, a call outside an authenticated scope has no principal.

Precedence is fixed and first-match-wins:

* trace id – diagnostic context keys, then request headers, then any extra
  sources (e.g. the active OpenTelemetry span);
* correlation id – diagnostic context keys, then request headers;
* user id – identity provider, then diagnostic context keys, then headers.
"""
from __future__ import annotations

import abc
from typing import Sequence

import structlog

from guard4j.kernel.security import IdentityProvider, SecurityContextIdentityProvider
from guard4j.observability.context.config import ContextConfig, CustomField, FieldSource
from guard4j.observability.context.diagnostic import DiagnosticContext
from guard4j.observability.context.request import RequestContextHolder
from guard4j.observability.context.sources import (
    Source,
    diagnostic_key,
    diagnostic_keys,
    first_non_blank,
    principal_name,
    request_attribute,
    request_header,
    request_headers,
)

TRACE_ID_KEYS: tuple[str, ...] = (
    "traceId", "trace_id", "X-Trace-Id", "traceid",
    "spanId", "span_id", "X-Span-Id", "spanid",
)

CORRELATION_ID_KEYS: tuple[str, ...] = (
    "correlationId", "correlation_id", "X-Correlation-ID", "X-Correlation-Id",
    "requestId", "request_id", "X-Request-ID", "X-Request-Id",
)

USER_ID_KEYS: tuple[str, ...] = ("userId", "user_id", "X-User-ID", "X-User-Id", "username")

TRACE_ID = "traceId"
USER_ID = "userId"
CORRELATION_ID = "correlationId"

_log = structlog.get_logger(__name__)


class ContextResolver(abc.ABC):
    """Port: gather correlation fields for the current call."""

    @abc.abstractmethod
    def extract_context(self) -> dict[str, str]:
        """All enabled fields that resolved to a value. Never raises."""

    @abc.abstractmethod
    def extract_trace_id(self) -> str | None: ...

    @abc.abstractmethod
    def extract_user_id(self) -> str | None: ...

    @abc.abstractmethod
    def extract_correlation_id(self) -> str | None: ...


class DefaultContextResolver(ContextResolver):
    """Resolver over the diagnostic context, current request and identity.

    Parameters
    ----------
    config:
        Which fields to collect.
    diagnostic:
        Diagnostic context store. Defaults to :class:`DiagnosticContext`.
    identity:
        Principal lookup. Defaults to :class:`SecurityContextIdentityProvider`.
    requests:
        Holder of the current inbound request.
    extra_trace_sources:
        Appended after the header lookups for the trace id.
    """

    def __init__(
        self,
        config: ContextConfig | None = None,
        *,
        diagnostic: type[DiagnosticContext] = DiagnosticContext,
        identity: IdentityProvider | None = None,
        requests: type[RequestContextHolder] = RequestContextHolder,
        extra_trace_sources: Sequence[Source] = (),
    ) -> None:
        self._config = config or ContextConfig()
        self._diagnostic = diagnostic
        self._requests = requests
        self._trace_sources: tuple[Source, ...] = (
            *diagnostic_keys(TRACE_ID_KEYS, diagnostic),
            *request_headers(TRACE_ID_KEYS, requests),
            *extra_trace_sources,
        )
        self._correlation_sources: tuple[Source, ...] = (
            *diagnostic_keys(CORRELATION_ID_KEYS, diagnostic),
            *request_headers(CORRELATION_ID_KEYS, requests),
        )
        self._user_sources: tuple[Source, ...] = (
            principal_name(identity or SecurityContextIdentityProvider()),
            *diagnostic_keys(USER_ID_KEYS, diagnostic),
            *request_headers(USER_ID_KEYS, requests),
        )

    @property
    def config(self) -> ContextConfig:
        return self._config

    def extract_context(self) -> dict[str, str]:
        context: dict[str, str] = {}
        if not self._config.enabled:
            return context
        wanted = (
            (self._config.include_trace_id, TRACE_ID, self.extract_trace_id),
            (self._config.include_user_id, USER_ID, self.extract_user_id),
            (self._config.include_correlation_id, CORRELATION_ID, self.extract_correlation_id),
        )
        for enabled, name, extract in wanted:
            if not enabled:
                continue
            value = extract()
            if value is not None:
                context[name] = value
        for field in self._config.custom_fields:
            value = self.extract_custom_field(field)
            if value is not None:
                context[field.name] = value
        return context

    def extract_trace_id(self) -> str | None:
        return first_non_blank(self._trace_sources)

    def extract_user_id(self) -> str | None:
        return first_non_blank(self._user_sources)

    def extract_correlation_id(self) -> str | None:
        return first_non_blank(self._correlation_sources)

    def extract_custom_field(self, field: CustomField) -> str | None:
        """Single declared source, no fallback chain."""
        if field.source is FieldSource.DIAGNOSTIC_CONTEXT:
            source = diagnostic_key(field.key, self._diagnostic)
        elif field.source is FieldSource.HEADER:
            source = request_header(field.key, self._requests)
        elif field.source is FieldSource.ATTRIBUTE:
            source = request_attribute(field.key, self._requests)
        else:
            _log.warning("unknown_custom_field_source", source=str(field.source), field=field.name)
            return None
        return first_non_blank((source,))


__all__ = [
    "CORRELATION_ID",
    "CORRELATION_ID_KEYS",
    "ContextResolver",
    "DefaultContextResolver",
    "TRACE_ID",
    "TRACE_ID_KEYS",
    "USER_ID",
    "USER_ID_KEYS",
]
