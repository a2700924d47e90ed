"""Observability – context configuration, ambient sources and resolver."""
from guard4j.observability.context.config import ContextConfig, CustomField, FieldSource
from guard4j.observability.context.diagnostic import DiagnosticContext
from guard4j.observability.context.request import (
    InboundRequest,
    MappingInboundRequest,
    RequestContextHolder,
)
from guard4j.observability.context.resolver import ContextResolver, DefaultContextResolver
from guard4j.observability.context.sources import Source, first_non_blank

__all__ = [
    "ContextConfig",
    "ContextResolver",
    "CustomField",
    "DefaultContextResolver",
    "DiagnosticContext",
    "FieldSource",
    "InboundRequest",
    "MappingInboundRequest",
    "RequestContextHolder",
    "Source",
    "first_non_blank",
]
