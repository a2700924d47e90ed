"""Kernel security – SecurityContext using contextvars."""

from __future__ import annotations

import contextlib
import contextvars
from typing import Iterator, Protocol

from guard4j.kernel.security.principal import Principal

_VAR: contextvars.ContextVar[Principal | None] = contextvars.ContextVar(
    "_guard4j_security_context", default=None
)


class SecurityContext:
    """Store and retrieve the current :class:`Principal` via
    :mod:`contextvars` so each thread and asyncio task has its own isolated
    context."""

    @staticmethod
    def get_current() -> Principal | None:
        """Return the current principal, or ``None`` if absent."""
        return _VAR.get()

    @staticmethod
    def set_current(principal: Principal) -> contextvars.Token[Principal | None]:
        """Set the current principal and return a reset token."""
        return _VAR.set(principal)

    @staticmethod
    def reset(token: contextvars.Token[Principal | None]) -> None:
        _VAR.reset(token)

    @staticmethod
    def clear() -> None:
        """Remove the current principal from context."""
        _VAR.set(None)

    @staticmethod
    @contextlib.contextmanager
    def authenticated(principal: Principal) -> Iterator[Principal]:
        """Run a block with *principal* installed, restoring the previous one."""
        token = _VAR.set(principal)
        try:
            yield principal
        finally:
            _VAR.reset(token)


class IdentityProvider(Protocol):
    """Port: name of the principal behind the current call, if any."""

    def current_principal_name(self) -> str | None: ...


class SecurityContextIdentityProvider:
    """:class:`IdentityProvider` backed by :class:`SecurityContext`.

    Unauthenticated principals yield ``None``. The anonymous placeholder is
    returned as-is; callers decide whether it counts as an identity.
    """

    def current_principal_name(self) -> str | None:
        principal = SecurityContext.get_current()
        if principal is None or not principal.is_authenticated:
            return None
        return principal.name


__all__ = ["IdentityProvider", "SecurityContext", "SecurityContextIdentityProvider"]
