"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError        (application.py)
    │   ├── CallerContractViolation
    │   └── ConfigError         (guard4j.config.validation)
    └── InfrastructureError     (infrastructure.py)
        └── ObservabilityFailure
"""

from guard4j.kernel.errors.application import ApplicationError, CallerContractViolation
from guard4j.kernel.errors.base import BaseError
from guard4j.kernel.errors.infrastructure import InfrastructureError, ObservabilityFailure

__all__ = [
    "ApplicationError",
    "BaseError",
    "CallerContractViolation",
    "InfrastructureError",
    "ObservabilityFailure",
]
