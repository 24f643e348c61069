"""Helpers for interacting with OpenAI API"""
from openai import AsyncOpenAI
from chatterbox.config import core

import logging
logger = logging.getLogger(__name__)

# One global async-capable client
aoai = AsyncOpenAI(api_key=core.OPENAI_API_KEY)


async def chat(prompt: str, model: str = core.MSG_MODEL_ID) -> str:
    """
    Send the assembled prompt as a single user message and return the reply text.

    Returns an empty string when the model produced no text.
    """
    resp = await aoai.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
    )

    content = resp.choices[0].message.content
    return (content or "").strip()
