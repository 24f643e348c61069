"""Fetch earlier channel messages to use as prompt history."""

from __future__ import annotations

import logging
from typing import Any, List

logger = logging.getLogger(__name__)


def _keep(message: Any, bot_user_id: int | None) -> bool:
    """Drop other bots' chatter but keep our own replies."""
    author = message.author
    return not getattr(author, "bot", False) or author.id == bot_user_id


async def fetch_history(message: Any, limit: int, bot_user_id: int | None) -> List[Any]:
    """
    Return up to ``limit`` messages sent before ``message``, oldest first.

    Discord yields history newest first; the result is reversed so the prompt
    reads chronologically.
    """

    if limit < 1:
        logger.error("Message limit < 1; cannot fetch history.")
        raise ValueError("Message limit must be >= 1")

    fetched = [
        previous
        async for previous in message.channel.history(limit=limit, before=message)
    ]
    kept = [previous for previous in fetched if _keep(previous, bot_user_id)]
    kept.reverse()

    logger.debug(
        "Fetched %d history message(s), kept %d for channel %s",
        len(fetched),
        len(kept),
        getattr(message.channel, "id", "unknown"),
    )
    return kept


__all__ = ["fetch_history"]
