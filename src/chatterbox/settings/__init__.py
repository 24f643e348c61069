"""
Per-server settings: flag registry, coercion and the shared store.

:func:`get_store` returns the process-wide
:class:`~chatterbox.settings.store.JsonSettingsStore` located at
``config.settings.SETTINGS_FILE``. Code that needs a different backend takes a
:class:`SettingsRepository` argument instead.
"""

from __future__ import annotations

from chatterbox.config import settings as settings_cfg

from .errors import (
    ChatterboxSettingsError,
    EmptyInput,
    InvalidValue,
    PersistenceFailure,
    UnknownFlag,
)
from .schema import (
    FLAGS,
    PERSONALITY_KEY,
    FlagSpec,
    FlagType,
    canonical,
    coerce,
    type_of,
)
from .store import JsonSettingsStore, ServerSettings, SettingsRepository

_store: SettingsRepository = JsonSettingsStore(settings_cfg.SETTINGS_FILE)


def get_store() -> SettingsRepository:
    return _store


__all__ = [
    "ChatterboxSettingsError",
    "EmptyInput",
    "InvalidValue",
    "PersistenceFailure",
    "UnknownFlag",
    "FLAGS",
    "PERSONALITY_KEY",
    "FlagSpec",
    "FlagType",
    "canonical",
    "coerce",
    "type_of",
    "JsonSettingsStore",
    "ServerSettings",
    "SettingsRepository",
    "get_store",
]
