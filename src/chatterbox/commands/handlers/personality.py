from __future__ import annotations

import re

from chatterbox.settings import PERSONALITY_KEY, EmptyInput, SettingsRepository

from . import register

_USAGE = "Usage: `--setPersonality You are helpful, friendly, and chatty.`"


def _personality_text(match: re.Match[str]) -> str:
    text = (match.group(1) or "").strip()
    if not text:
        raise EmptyInput(f"Personality text cannot be empty. {_USAGE}")
    return text


@register
class SetPersonalityCommand:
    """Store free-form personality text; always a string, never type-checked."""

    command_str = "setPersonality"
    pattern = re.compile(r"--setPersonality(?=\s|$)(.*)", re.IGNORECASE | re.DOTALL)
    priority = 50

    @staticmethod
    def handle(community_id: str, match: re.Match[str], store: SettingsRepository) -> str:
        try:
            text = _personality_text(match)
        except EmptyInput as exc:
            return f"❌ {exc}"

        store.set(community_id, PERSONALITY_KEY, text)
        return f'✅ Set personality to: "{text}"'
