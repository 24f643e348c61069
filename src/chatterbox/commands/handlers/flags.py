from __future__ import annotations

import re

from chatterbox.settings import (
    InvalidValue,
    SettingsRepository,
    UnknownFlag,
    canonical,
    coerce,
    type_of,
)

from . import register


def _type_note(name: str, template: str = " (type: `{}`)") -> str:
    flag_type = type_of(name)
    return template.format(flag_type.value) if flag_type else ""


@register
class SetFlagCommand:
    command_str = "setFlag"
    pattern = re.compile(r'--setFlag="([^"]+):\s*([^"]+)"', re.IGNORECASE)
    priority = 10

    @staticmethod
    def handle(community_id: str, match: re.Match[str], store: SettingsRepository) -> str:
        name = match.group(1).strip()
        raw = match.group(2).strip()

        try:
            value = coerce(name, raw)
        except (UnknownFlag, InvalidValue) as exc:
            return f"❌ {exc}"

        store.set(community_id, name, value)
        return f"✅ Set flag `{name}`{_type_note(name)} to `{canonical(value)}`"


@register
class GetFlagCommand:
    command_str = "getFlag"
    pattern = re.compile(r'--getFlag="([^"]+)"', re.IGNORECASE)
    priority = 20

    @staticmethod
    def handle(community_id: str, match: re.Match[str], store: SettingsRepository) -> str:
        name = match.group(1).strip()
        value = store.get(community_id, name)
        if value is None:
            return f"❌ Flag `{name}`{_type_note(name)} is not set"
        return f"📋 Flag `{name}`{_type_note(name)} = `{canonical(value)}`"


@register
class ListFlagsCommand:
    command_str = "listFlags"
    pattern = re.compile(r"--listFlags", re.IGNORECASE)
    priority = 30

    @staticmethod
    def handle(community_id: str, match: re.Match[str], store: SettingsRepository) -> str:
        current = store.list(community_id)
        if not current:
            return "📋 No flags set for this server"

        lines = [
            f"  • `{name}`{_type_note(name, ' ({})')}: `{canonical(value)}`"
            for name, value in current.items()
        ]
        return "📋 Server flags:\n" + "\n".join(lines)


@register
class RemoveFlagCommand:
    command_str = "removeFlag"
    pattern = re.compile(r'--removeFlag="([^"]+)"', re.IGNORECASE)
    priority = 40

    @staticmethod
    def handle(community_id: str, match: re.Match[str], store: SettingsRepository) -> str:
        name = match.group(1).strip()
        if store.remove(community_id, name):
            return f"✅ Removed flag `{name}`"
        return f"⚠️ Flag `{name}` was not set"
