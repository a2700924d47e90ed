"""Application-layer errors raised across the library boundary."""

from __future__ import annotations

from typing import Any

from guard4j.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class CallerContractViolation(ApplicationError):
    """The calling code broke an API precondition (e.g. passed ``None``).

    Always propagated: this is a bug in the emitting code, not a backend
    problem.
    """

    default_code = "caller_contract_violation"

    def __init__(self, message: str = "Event cannot be None", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


__all__ = ["ApplicationError", "CallerContractViolation"]
