"""Assemble the final prompt string sent to the model."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from chatterbox import settings
from chatterbox.formatter import (
    author_label,
    format_message,
    replace_mentions,
    sanitize_personality,
)
from chatterbox.settings import PERSONALITY_KEY, FlagType, SettingsRepository

from .system_prompt import (
    RUNESCAPE_SECTION,
    current_message_section,
    get_system_prompt,
    personality_section,
)

logger = logging.getLogger(__name__)

RUNESCAPE_FLAG = "runescape"


def community_id_of(message: Any) -> str | None:
    """Return the server id of ``message`` as stored in settings, ``None`` in DMs."""

    guild = getattr(message, "guild", None)
    return str(guild.id) if guild is not None else None


def build_history_section(history: Sequence[Any], bot_user_id: int | None) -> str:
    """Render ``history`` (oldest first) as newline separated dialogue lines."""

    if not history:
        return ""
    lines = [format_message(msg, bot_user_id) for msg in history]
    return "\n".join(lines) + "\n\n"


def build_mode_section(community_id: str | None, store: SettingsRepository) -> str:
    if community_id is None:
        return ""
    enabled = store.get(community_id, RUNESCAPE_FLAG, False, expected=FlagType.BOOLEAN)
    return RUNESCAPE_SECTION if enabled else ""


def build_personality_section(community_id: str | None, store: SettingsRepository) -> str:
    if community_id is None:
        return ""
    personality = store.get(community_id, PERSONALITY_KEY, expected=str)
    if not personality:
        return ""
    sanitized = sanitize_personality(personality)
    return personality_section(sanitized) if sanitized else ""


def build_prompt(
    message: Any,
    history: Sequence[Any],
    bot_user_id: int | None,
    content: str | None = None,
    store: SettingsRepository | None = None,
) -> str:
    """
    Build the prompt for ``message``.

    Sections are always emitted in this order: system instructions, history,
    current message, mode augmentation (``runescape`` flag), personality.

    :param message: Message that mentioned the bot.
    :param history: Earlier channel messages, oldest first.
    :param bot_user_id: Our own user id.
    :param content: Text to use instead of ``message.content`` (e.g. with
        directives removed).
    :param store: Settings repository; defaults to the shared store.
    """

    store = store or settings.get_store()
    community_id = community_id_of(message)

    author = author_label(message.author, bot_user_id)
    body = replace_mentions(message, bot_user_id, content or None)

    sections = [
        get_system_prompt(),
        build_history_section(history, bot_user_id),
        current_message_section(author, body),
        build_mode_section(community_id, store),
        build_personality_section(community_id, store),
    ]
    return "".join(sections)


__all__ = [
    "build_prompt",
    "build_history_section",
    "build_mode_section",
    "build_personality_section",
    "community_id_of",
]
