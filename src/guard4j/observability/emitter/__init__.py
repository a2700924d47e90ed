"""Observability – emitters and their registry."""
from guard4j.observability.emitter.emitter import Emitter, ProcessorHandle
from guard4j.observability.emitter.registry import (
    EmitterRegistry,
    default_registry,
    get_emitter,
    scope_name,
    set_processor,
)

__all__ = [
    "Emitter",
    "EmitterRegistry",
    "ProcessorHandle",
    "default_registry",
    "get_emitter",
    "scope_name",
    "set_processor",
]
