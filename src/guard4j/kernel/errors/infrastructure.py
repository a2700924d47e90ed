"""Infrastructure errors – metrics/logging backend failures."""

from __future__ import annotations

from typing import Any

from guard4j.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a caller mistake."""

    default_code = "infrastructure_error"


class ObservabilityFailure(InfrastructureError):
    """Resolving context, updating a metric or writing a log record failed.

    Never crosses the processor boundary; it is reported through the
    processor's own logger and dropped.
    """

    default_code = "observability_failure"

    def __init__(
        self,
        stage: str,
        event_type: str | None = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"Observability {stage} failed for event '{event_type}'",
            **kwargs,
        )
        self.stage = stage
        self.event_type = event_type

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["stage"] = self.stage
        base["event_type"] = self.event_type
        return base


__all__ = ["InfrastructureError", "ObservabilityFailure"]
