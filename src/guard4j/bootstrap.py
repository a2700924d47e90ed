"""Composition root – build and install the observability pipeline.

Call once at application startup::

    import guard4j
    from guard4j.bootstrap import configure_observability

    guard4j.JsonLoggerFactory.configure()
    configure_observability(application_name="payments")

Emitters obtained before this call start routing as soon as it returns.
"""
from __future__ import annotations

import dataclasses
from typing import Sequence

from guard4j.config.settings import EnvSettingsLoader, SettingsLoader
from guard4j.config.settings.observability import ObservabilitySettings
from guard4j.kernel.security import IdentityProvider
from guard4j.observability.context import DefaultContextResolver, RequestContextHolder, Source
from guard4j.observability.emitter import EmitterRegistry, default_registry
from guard4j.observability.events import BusinessEvent, CoreEvents
from guard4j.observability.logging import get_logger
from guard4j.observability.metrics import Metrics
from guard4j.observability.processor import DefaultObservabilityProcessor

_log = get_logger(__name__)


def configure_observability(
    settings: ObservabilitySettings | None = None,
    *,
    metrics: Metrics | None = None,
    registry: EmitterRegistry | None = None,
    application_name: str | None = None,
    identity: IdentityProvider | None = None,
    requests: type[RequestContextHolder] = RequestContextHolder,
    extra_trace_sources: Sequence[Source] = (),
    loader: SettingsLoader | None = None,
    emit_initialized: bool = True,
) -> DefaultObservabilityProcessor | None:
    """Wire resolver → processor → registry from *settings*.

    Parameters
    ----------
    settings:
        Defaults to ``GUARD4J_*`` environment variables read by *loader*.
    metrics:
        Metrics backend. When metrics are enabled and none is given, an
        :class:`~guard4j.adapters.opentelemetry.OtelMetrics` is used.
    registry:
        Target registry; the module default when omitted.

    Returns
    -------
    The installed processor, or ``None`` when ``settings.enabled`` is false.

    Raises
    ------
    ConfigError
        On invalid settings; nothing is installed in that case.
    """
    if settings is None:
        settings = (loader or EnvSettingsLoader()).load(ObservabilitySettings)
    if application_name is not None:
        settings = dataclasses.replace(settings, application_name=application_name)
    target = registry if registry is not None else default_registry

    if not settings.enabled:
        _log.info("guard4j_disabled")
        return None

    if settings.metrics_enabled and metrics is None:
        from guard4j.adapters.opentelemetry import OtelMetrics

        metrics = OtelMetrics()

    resolver = None
    if settings.context_enabled:
        resolver = DefaultContextResolver(
            settings.context_config(),
            identity=identity,
            requests=requests,
            extra_trace_sources=extra_trace_sources,
        )

    processor = DefaultObservabilityProcessor(settings, metrics, context_resolver=resolver)
    target.set_processor(processor)
    _log.debug(
        "guard4j_configured",
        metrics_prefix=processor.metrics_prefix,
        context_enabled=resolver is not None,
    )

    if emit_initialized:
        initialized = BusinessEvent(CoreEvents.GUARD4J_INITIALIZED)
        target.get_emitter(__name__).emit(initialized, initialized.severity)
    return processor


__all__ = ["configure_observability"]
