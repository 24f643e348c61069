import logging
import re

import discord

from chatterbox import commands
from chatterbox import response
from chatterbox.directives import parse_directives
from chatterbox.response.prompt_builder import community_id_of

from .delivery import send_reply

logger = logging.getLogger(__name__)

GREETING = "Hello! How can I help you?"
EMPTY_REPLY = "I received an empty response from the model."
FAILURE_REPLY = "Sorry, I encountered an error while processing your request."


def strip_bot_mention(content: str, bot_user_id: int) -> str:
    """Remove every ``<@id>`` / ``<@!id>`` mention of the bot."""
    return re.sub(rf"<@!?{bot_user_id}>", "", content or "").strip()


async def handle(client: discord.Client, message: discord.Message):
    """
    Handle incoming discord messages.
    - client: Discord bot client instance
    - message: The incoming message object

    Directives and server config commands both read the raw text (mention
    removed). Directives are parsed first, but a matched command ends
    processing and its directives are discarded; otherwise the directive-free
    text is what the model sees.
    """
    # 1) Ignore bots, including ourselves
    if message.author.bot:
        return

    bot_user = client.user
    if bot_user is None:
        return
    mentioned = any(user.id == bot_user.id for user in message.mentions or [])
    if not mentioned:
        return

    raw_content = strip_bot_mention(message.content, bot_user.id)
    if not raw_content:
        await message.reply(GREETING)
        return

    # 2) Per-message directives (e.g. --advanced, --context 50)
    directives, content = parse_directives(raw_content)

    # 3) Server config commands short-circuit the model call
    result = commands.dispatch(community_id_of(message), raw_content)
    if result.handled:
        await message.reply(result.response or "Command processed.")
        return

    if not content:
        await message.reply(GREETING)
        return

    logger.info(
        "Mentioned in channel %s (ID: %s) by %s",
        getattr(message.channel, "name", None) or message.channel.__class__.__name__,
        getattr(message.channel, "id", "unknown"),
        message.author,
    )

    # 4) Generate and deliver the reply
    try:
        async with message.channel.typing():
            reply = await response.handle(message, bot_user.id, content, directives)

        if not reply or not reply.strip():
            await message.reply(EMPTY_REPLY)
            return

        await send_reply(message, reply)
    except Exception:
        logger.exception("Error generating reply for message %s", message.id)
        await message.reply(FAILURE_REPLY)
