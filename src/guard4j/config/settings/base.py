"""Config settings – Settings base class.

Subclasses are dataclasses whose fields map to environment variables named
``<PREFIX>_<FIELD>`` (upper-cased). ``_prefix`` is class-level, never a field.
"""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass
class Settings:
    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """Environment variable for *field_name*; no leading ``_`` when unprefixed."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Hook for cross-field checks; raise a ``ConfigError`` subclass."""


__all__ = ["Settings"]
