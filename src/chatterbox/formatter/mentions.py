"""Resolve Discord mention syntax to readable names."""

from __future__ import annotations

import re
from typing import Any

SELF_MARKER = "_YOU_"


def replace_mentions(message: Any, bot_user_id: int | None, content: str | None = None) -> str:
    """
    Replace ``<@id>``, ``<@&id>`` and ``<#id>`` tokens with ``@name`` / ``#name``.

    :param message: Discord message whose mention lists are used for lookups.
    :param bot_user_id: Our own user id; mentions of it become ``@_YOU_``.
    :param content: Text to rewrite instead of ``message.content``.
    :returns: The rewritten text, stripped.
    """
    text = message.content if content is None else content
    text = text or ""

    for user in getattr(message, "mentions", None) or []:
        pattern = re.compile(rf"<@!?{user.id}>")
        if bot_user_id is not None and user.id == bot_user_id:
            text = pattern.sub(f"@{SELF_MARKER}", text)
        else:
            text = pattern.sub(f"@{user.name}", text)

    for role in getattr(message, "role_mentions", None) or []:
        text = re.sub(rf"<@&{role.id}>", f"@{role.name}", text)

    for channel in getattr(message, "channel_mentions", None) or []:
        channel_name = getattr(channel, "name", None) or "channel"
        text = re.sub(rf"<#{channel.id}>", f"#{channel_name}", text)

    return text.strip()
