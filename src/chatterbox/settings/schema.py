"""
Static flag registry and value coercion.

Flags are named, typed, per-server settings. The registry is a closed table
built once at import time::

    FLAGS["runescape"] -> FlagSpec(name="runescape", type=FlagType.BOOLEAN)

:func:`coerce` is the single validation boundary for values typed in chat:
the store persists whatever it is handed and never re-validates.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .errors import InvalidValue, UnknownFlag

FlagValue = bool | int | float | str


class FlagType(str, Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"

    def matches(self, value: object) -> bool:
        """Return ``True`` when ``value`` has the Python shape of this type."""
        if self is FlagType.BOOLEAN:
            return isinstance(value, bool)
        if self is FlagType.NUMBER:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        return isinstance(value, str)


@dataclass(frozen=True, slots=True)
class FlagSpec:
    name: str
    type: FlagType


# Add new flags here.
_FLAG_SPECS = (
    FlagSpec("runescape", FlagType.BOOLEAN),
    FlagSpec("context", FlagType.NUMBER),
)

FLAGS: Mapping[str, FlagSpec] = MappingProxyType({spec.name: spec for spec in _FLAG_SPECS})

# Free-form personality text; always a string, outside the typed registry.
PERSONALITY_KEY = "personality"

BOOLEAN_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
BOOLEAN_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def type_of(name: str) -> FlagType | None:
    """Return the registered type of ``name`` or ``None`` if unknown."""
    spec = FLAGS.get(name)
    return spec.type if spec else None


def coerce(name: str, raw: str) -> FlagValue:
    """
    Parse ``raw`` according to the registered type of ``name``.

    :raises UnknownFlag: ``name`` is not registered.
    :raises InvalidValue: ``raw`` does not parse as the registered type.
    """
    flag_type = type_of(name)
    if flag_type is None:
        raise UnknownFlag(name)

    text = raw.strip()

    if flag_type is FlagType.BOOLEAN:
        lowered = text.lower()
        if lowered in BOOLEAN_TRUE_VALUES:
            return True
        if lowered in BOOLEAN_FALSE_VALUES:
            return False
        raise InvalidValue(
            name, raw, f'Invalid boolean value: "{raw}". Expected "true" or "false".'
        )

    if flag_type is FlagType.NUMBER:
        try:
            number = float(text)
        except ValueError:
            raise InvalidValue(name, raw, f'Invalid number value: "{raw}"') from None
        if not math.isfinite(number):
            raise InvalidValue(name, raw, f'Invalid number value: "{raw}"')
        return int(number) if number.is_integer() else number

    return text


def canonical(value: object) -> str:
    """Render a stored value the way confirmations show it (JSON)."""
    return json.dumps(value, ensure_ascii=False)


__all__ = [
    "FlagType",
    "FlagSpec",
    "FlagValue",
    "FLAGS",
    "PERSONALITY_KEY",
    "BOOLEAN_TRUE_VALUES",
    "BOOLEAN_FALSE_VALUES",
    "type_of",
    "coerce",
    "canonical",
]
