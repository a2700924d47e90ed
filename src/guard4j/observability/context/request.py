"""Observability – inbound request collaborator.

The resolver only needs "the current request, if any" with header and
attribute lookup. Web adapters bind a request for the duration of a call;
background jobs have none.
"""
from __future__ import annotations

import contextlib
import dataclasses
from contextvars import ContextVar, Token
from typing import Any, Iterator, Mapping, Protocol


class InboundRequest(Protocol):
    """Port: header and attribute lookup on the request being served."""

    def header(self, name: str) -> str | None: ...

    def attribute(self, name: str) -> Any: ...


@dataclasses.dataclass(frozen=True)
class MappingInboundRequest:
    """:class:`InboundRequest` over plain mappings; header names are case-insensitive."""

    headers: Mapping[str, str] = dataclasses.field(default_factory=dict)
    attributes: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", {k.lower(): v for k, v in self.headers.items()})

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def attribute(self, name: str) -> Any:
        return self.attributes.get(name)


_CTX_VAR: ContextVar[InboundRequest | None] = ContextVar("_guard4j_inbound_request", default=None)


class RequestContextHolder:
    """Ambient current request stored in a ``ContextVar``."""

    @staticmethod
    def current() -> InboundRequest | None:
        return _CTX_VAR.get()

    @staticmethod
    def set(request: InboundRequest) -> Token[InboundRequest | None]:
        return _CTX_VAR.set(request)

    @staticmethod
    def reset(token: Token[InboundRequest | None]) -> None:
        _CTX_VAR.reset(token)

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)

    @staticmethod
    @contextlib.contextmanager
    def bind(request: InboundRequest) -> Iterator[InboundRequest]:
        token = _CTX_VAR.set(request)
        try:
            yield request
        finally:
            _CTX_VAR.reset(token)


__all__ = ["InboundRequest", "MappingInboundRequest", "RequestContextHolder"]
