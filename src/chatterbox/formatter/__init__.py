"""
Render Discord messages as lines of dialogue for the prompt.

Author labels follow a fixed priority:

.. code-block:: text

    _YOU_: ...                 our own messages (even though Discord marks them as bot)
    Bot (helper): ...          any other bot
    alice: ...                 everyone else
"""

from __future__ import annotations

import re
from typing import Any

from .mentions import SELF_MARKER, replace_mentions

__all__ = [
    "SELF_MARKER",
    "author_label",
    "format_message",
    "replace_mentions",
    "sanitize_personality",
]

_WHITESPACE_RE = re.compile(r"\s+")


def author_label(author: Any, bot_user_id: int | None) -> str:
    """Return how ``author`` is named in the prompt."""

    if bot_user_id is not None and author.id == bot_user_id:
        return SELF_MARKER
    if getattr(author, "bot", False):
        return f"Bot ({author.name})"
    return author.name


def format_message(message: Any, bot_user_id: int | None, content: str | None = None) -> str:
    """Return ``"<author>: <body>"`` for ``message``."""

    author = author_label(message.author, bot_user_id)
    body = replace_mentions(message, bot_user_id, content)
    return f"{author}: {body}"


def sanitize_personality(personality: str) -> str:
    """
    Make server-supplied personality text safe to embed in the prompt.

    Backslashes and double quotes are escaped and every whitespace run
    (newlines included) becomes a single space, so the text cannot open new
    prompt sections.
    """

    sanitized = personality.replace("\\", "\\\\").replace('"', '\\"')
    return _WHITESPACE_RE.sub(" ", sanitized).strip()
