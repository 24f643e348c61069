"""Entry-point helpers for generating replies."""

from __future__ import annotations

import logging
import math

import discord

from chatterbox import settings
from chatterbox.clients import oai, ollama
from chatterbox.config import core, local_llm
from chatterbox.directives import Directives
from chatterbox.settings import FlagType, SettingsRepository

from .history import fetch_history
from .prompt_builder import build_prompt, community_id_of

logger = logging.getLogger(__name__)

CONTEXT_FLAG = "context"


def resolve_context_limit(
    community_id: str | None,
    directives: Directives,
    store: SettingsRepository | None = None,
) -> int:
    """
    Pick how many earlier messages to read.

    A server-level ``context`` flag wins over the per-message directive, which
    wins over ``core.CONTEXT_LENGTH``; the result is clamped to
    ``[1, core.MAX_CONTEXT_LENGTH]``.
    """

    requested = directives.context_size
    if requested is None:
        requested = core.CONTEXT_LENGTH
    if community_id is not None:
        store = store or settings.get_store()
        server_context = store.get(community_id, CONTEXT_FLAG, expected=FlagType.NUMBER)
        if server_context is not None:
            if math.isfinite(server_context):
                requested = int(server_context)
            else:
                logger.warning("Ignoring non-finite context setting for server %s", community_id)

    return max(1, min(core.MAX_CONTEXT_LENGTH, requested))


def select_model(directives: Directives) -> str:
    if local_llm.USE_LOCAL:
        return local_llm.LOCAL_ADVANCED_MODEL_ID if directives.use_advanced_model else local_llm.LOCAL_MODEL_ID
    return core.ADVANCED_MODEL_ID if directives.use_advanced_model else core.MSG_MODEL_ID


async def handle(
    message: discord.Message,
    bot_user_id: int | None,
    content: str,
    directives: Directives,
) -> str:
    """Generate a reply to ``message`` using ``content`` as its cleaned text."""

    community_id = community_id_of(message)
    limit = resolve_context_limit(community_id, directives)
    history = await fetch_history(message, limit, bot_user_id)

    prompt = build_prompt(message, history, bot_user_id, content)
    model = select_model(directives)

    if core.TEST_MODE:
        logger.info("Prompt being sent to model %s:\n---\n%s\n---", model, prompt)

    if local_llm.USE_LOCAL:
        reply = await ollama.chat(prompt, model=model)
    else:
        reply = await oai.chat(prompt, model=model)

    if core.TEST_MODE:
        logger.info("Response from model:\n---\n%s\n---", reply)

    return reply


__all__ = ["handle", "resolve_context_limit", "select_model"]
