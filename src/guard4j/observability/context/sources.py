"""Observability – context sources and the first-non-blank combinator.

A *source* is a zero-argument callable returning a value or ``None``.
Each resolver field is an ordered tuple of sources; the first non-blank
answer wins.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Sequence

import structlog

from guard4j.kernel.security import ANONYMOUS_PRINCIPAL, IdentityProvider
from guard4j.observability.context.diagnostic import DiagnosticContext
from guard4j.observability.context.request import RequestContextHolder

Source = Callable[[], Any]

_log = structlog.get_logger(__name__)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def first_non_blank(sources: Iterable[Source]) -> str | None:
    """Return the first non-blank value produced by *sources*.

    A source that raises is treated as empty.
    """
    for source in sources:
        try:
            value = _text(source())
        except Exception as exc:  # noqa: BLE001
            _log.debug("context_source_failed", source=getattr(source, "__name__", repr(source)), error=str(exc))
            continue
        if value is not None:
            return value
    return None


def diagnostic_key(key: str, store: type[DiagnosticContext] = DiagnosticContext) -> Source:
    def source() -> Any:
        return store.get(key)

    source.__name__ = f"diagnostic:{key}"
    return source


def request_header(name: str, holder: type[RequestContextHolder] = RequestContextHolder) -> Source:
    def source() -> Any:
        request = holder.current()
        return request.header(name) if request is not None else None

    source.__name__ = f"header:{name}"
    return source


def request_attribute(name: str, holder: type[RequestContextHolder] = RequestContextHolder) -> Source:
    def source() -> Any:
        request = holder.current()
        return request.attribute(name) if request is not None else None

    source.__name__ = f"attribute:{name}"
    return source


def principal_name(identity: IdentityProvider) -> Source:
    """Current principal's name; the anonymous placeholder counts as no identity."""

    def source() -> Any:
        name = identity.current_principal_name()
        if name == ANONYMOUS_PRINCIPAL:
            return None
        return name

    source.__name__ = "principal"
    return source


def diagnostic_keys(keys: Sequence[str], store: type[DiagnosticContext] = DiagnosticContext) -> tuple[Source, ...]:
    return tuple(diagnostic_key(k, store) for k in keys)


def request_headers(keys: Sequence[str], holder: type[RequestContextHolder] = RequestContextHolder) -> tuple[Source, ...]:
    return tuple(request_header(k, holder) for k in keys)


__all__ = [
    "Source",
    "diagnostic_key",
    "diagnostic_keys",
    "first_non_blank",
    "principal_name",
    "request_attribute",
    "request_header",
    "request_headers",
]
