"""Split long replies to fit Discord's message size limit."""

from __future__ import annotations

import logging
from typing import List

import discord

from chatterbox.config import core

logger = logging.getLogger(__name__)


def chunk_reply(text: str, limit: int | None = None) -> List[str]:
    """Cut ``text`` into consecutive pieces of at most ``limit`` characters."""

    size = limit or core.MAX_REPLY_LENGTH
    if size < 1:
        raise ValueError("Chunk size must be >= 1")
    return [text[i : i + size] for i in range(0, len(text), size)]


async def send_reply(message: discord.Message, text: str) -> None:
    """Reply with the first chunk and post any remaining chunks to the channel."""

    chunks = chunk_reply(text)
    if len(chunks) > 1:
        logger.info("Splitting reply to message %s into %d chunks", message.id, len(chunks))

    for idx, chunk in enumerate(chunks):
        if idx == 0:
            await message.reply(chunk)
        else:
            await message.channel.send(chunk)


__all__ = ["chunk_reply", "send_reply"]
