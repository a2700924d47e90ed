"""Observability – EmitterRegistry.

Single point of emitter lookup and processor installation. The host's
composition root owns a registry (or uses the module default) and installs
the processor once at startup.
"""
from __future__ import annotations

import threading
from typing import Any

from guard4j.observability.emitter.emitter import Emitter, ProcessorHandle
from guard4j.observability.processor.ports import ObservabilityProcessor


def scope_name(scope: Any) -> str:
    """``"a.b"`` stays as is; a class or instance becomes ``module.QualName``."""
    if isinstance(scope, str):
        return scope
    cls = scope if isinstance(scope, type) else type(scope)
    return f"{cls.__module__}.{cls.__qualname__}"


class EmitterRegistry:
    """Scope → :class:`Emitter` cache plus the active processor handle."""

    def __init__(self, processor: ObservabilityProcessor | None = None) -> None:
        self._handle = ProcessorHandle(processor)
        self._emitters: dict[str, Emitter] = {}
        self._lock = threading.Lock()

    @property
    def processor(self) -> ObservabilityProcessor | None:
        return self._handle.get()

    def set_processor(self, processor: ObservabilityProcessor | None) -> None:
        """Replace the active processor; ``None`` turns every emitter into a no-op."""
        self._handle.set(processor)

    def get_emitter(self, scope: Any) -> Emitter:
        """Return the emitter for *scope*, creating it on first use."""
        name = scope_name(scope)
        emitter = self._emitters.get(name)
        if emitter is not None:
            return emitter
        with self._lock:
            emitter = self._emitters.get(name)
            if emitter is None:
                emitter = Emitter(name, self._handle)
                self._emitters[name] = emitter
            return emitter

    def clear(self) -> None:
        """Drop cached emitters; the processor stays installed. For tests."""
        with self._lock:
            self._emitters.clear()

    def __len__(self) -> int:
        return len(self._emitters)


default_registry = EmitterRegistry()


def get_emitter(scope: Any) -> Emitter:
    """Emitter for *scope* from the default registry."""
    return default_registry.get_emitter(scope)


def set_processor(processor: ObservabilityProcessor | None) -> None:
    """Install *processor* in the default registry."""
    default_registry.set_processor(processor)


__all__ = ["EmitterRegistry", "default_registry", "get_emitter", "scope_name", "set_processor"]
