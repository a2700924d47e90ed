"""Kernel security – Principal, SecurityContext, identity port."""
from guard4j.kernel.security.principal import ANONYMOUS_PRINCIPAL, Principal
from guard4j.kernel.security.security_context import (
    IdentityProvider,
    SecurityContext,
    SecurityContextIdentityProvider,
)

__all__ = [
    "ANONYMOUS_PRINCIPAL",
    "IdentityProvider",
    "Principal",
    "SecurityContext",
    "SecurityContextIdentityProvider",
]
