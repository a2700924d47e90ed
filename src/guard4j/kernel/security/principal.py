"""Kernel security – Principal."""
from __future__ import annotations

import dataclasses
from typing import Any

ANONYMOUS_PRINCIPAL = "anonymousUser"


@dataclasses.dataclass(frozen=True)
class Principal:
    """Identity attached to the current request or job."""
    subject: str
    tenant_id: str | None = None
    claims: dict[str, Any] = dataclasses.field(default_factory=dict)
    is_authenticated: bool = True
    is_service_account: bool = False

    @property
    def name(self) -> str:
        return self.subject

    @property
    def is_anonymous(self) -> bool:
        return self.subject == ANONYMOUS_PRINCIPAL

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls(subject=ANONYMOUS_PRINCIPAL, is_authenticated=False)


__all__ = ["ANONYMOUS_PRINCIPAL", "Principal"]
