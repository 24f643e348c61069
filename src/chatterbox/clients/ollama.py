"""Helpers for interacting with a local Ollama server"""

from chatterbox.config import local_llm
from ollama import AsyncClient

client = AsyncClient(host=local_llm.LOCAL_SERVER_URL)


async def chat(prompt: str, model: str = local_llm.LOCAL_MODEL_ID) -> str:
    """Send the assembled prompt to the local server and return its reply."""
    resp = await client.chat(
        model=model,
        messages=[{"role": "user", "content": prompt}],
    )

    return (resp.message.content or "").strip()
