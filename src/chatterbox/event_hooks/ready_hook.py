import discord

from chatterbox.config import core, local_llm

import logging

logger = logging.getLogger(__name__)


async def handle(client: discord.Client):
    """Log identity and runtime mode once the gateway session is ready."""
    logger.info(
        "Bot is ready! Running in %s mode", "TEST" if core.TEST_MODE else "REGULAR"
    )
    logger.info(f"Logged in as {client.user} (ID: {client.user.id})")

    if local_llm.USE_LOCAL:
        logger.info("Using local models at %s", local_llm.LOCAL_SERVER_URL)
    else:
        logger.info(
            "Using models %s (regular) and %s (advanced)",
            core.MSG_MODEL_ID,
            core.ADVANCED_MODEL_ID,
        )
