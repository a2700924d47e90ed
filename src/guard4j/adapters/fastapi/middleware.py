"""FastAPI adapter – make the current request visible to the context resolver.

FastAPIRequestContextMiddleware binds a :class:`StarletteInboundRequest` into
:class:`~guard4j.observability.context.RequestContextHolder` for the
lifetime of each HTTP/websocket call.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from starlette.requests import HTTPConnection

from guard4j.observability.context.request import RequestContextHolder

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


class StarletteInboundRequest:
    """:class:`InboundRequest` over a Starlette connection.

    Headers are case-insensitive; attributes are read from ``request.state``.
    """

    def __init__(self, connection: HTTPConnection) -> None:
        self._connection = connection

    def header(self, name: str) -> str | None:
        return self._connection.headers.get(name)

    def attribute(self, name: str) -> Any:
        return getattr(self._connection.state, name, None)


class FastAPIRequestContextMiddleware:
    """Pure ASGI middleware; non-HTTP scopes pass straight through."""

    def __init__(self, app: "ASGIApp") -> None:
        self.app = app

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        token = RequestContextHolder.set(StarletteInboundRequest(HTTPConnection(scope)))
        try:
            await self.app(scope, receive, send)
        finally:
            RequestContextHolder.reset(token)


__all__ = ["FastAPIRequestContextMiddleware", "StarletteInboundRequest"]
