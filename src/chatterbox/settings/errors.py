"""Error taxonomy for per-server settings."""

from __future__ import annotations


class ChatterboxSettingsError(Exception):
    """Base class for settings validation and persistence errors."""


class UnknownFlag(ChatterboxSettingsError):
    """Raised when a flag name is absent from the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'Flag type not defined for "{name}". Please define it in FLAGS.'
        )


class InvalidValue(ChatterboxSettingsError):
    """Raised when a raw value cannot be coerced to the flag's type."""

    def __init__(self, name: str, raw: str, reason: str) -> None:
        self.name = name
        self.raw = raw
        super().__init__(reason)


class EmptyInput(ChatterboxSettingsError):
    """Raised when a command needs text and none was given."""


class PersistenceFailure(ChatterboxSettingsError):
    """Raised by store I/O helpers; always recovered inside the store."""


__all__ = [
    "ChatterboxSettingsError",
    "UnknownFlag",
    "InvalidValue",
    "EmptyInput",
    "PersistenceFailure",
]
