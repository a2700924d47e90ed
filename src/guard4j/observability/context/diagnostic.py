"""Observability – DiagnosticContext.

The ambient key/value store that log records are enriched from. Backed by
:mod:`structlog.contextvars`, so it is isolated per thread and per asyncio
task and merged into every record by ``merge_contextvars``.
"""
from __future__ import annotations

import contextlib
from typing import Any, Iterator, Mapping

import structlog


class DiagnosticContext:
    """Thin facade over :mod:`structlog.contextvars`."""

    @staticmethod
    def get(key: str) -> Any | None:
        return structlog.contextvars.get_contextvars().get(key)

    @staticmethod
    def snapshot() -> dict[str, Any]:
        return structlog.contextvars.get_contextvars()

    @staticmethod
    def bind(**values: Any) -> None:
        structlog.contextvars.bind_contextvars(**values)

    @staticmethod
    def unbind(*keys: str) -> None:
        structlog.contextvars.unbind_contextvars(*keys)

    @staticmethod
    def clear() -> None:
        structlog.contextvars.clear_contextvars()

    @staticmethod
    @contextlib.contextmanager
    def staged(values: Mapping[str, Any]) -> Iterator[None]:
        """Bind *values* for the duration of the block.

        On exit every staged key is removed and any value it shadowed is
        restored, including when the block raises.
        """
        with structlog.contextvars.bound_contextvars(**values):
            yield


__all__ = ["DiagnosticContext"]
