import logging
import os

logger = logging.getLogger(__name__)


def _truthy(raw) -> bool:
    return str(raw).lower() in ("1", "true", "yes")


class Core:
    def __init__(self, config: dict | None = None) -> None:
        cfg = (config or {}).get("chatterbox", {})
        discord_cfg = cfg.get("discord", {})
        models_cfg = cfg.get("models", {})
        limits_cfg = cfg.get("limits", {})

        self.TEST_MODE: bool = _truthy(cfg.get("test_mode", os.getenv("TEST_MODE", "0")))

        # Test mode logs in with a separate bot account
        if self.TEST_MODE:
            token_env = str(discord_cfg.get("test_token_env", "DISCORD_TEST_API_TOKEN"))
        else:
            token_env = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))
        openai_env = str(discord_cfg.get("openai_key_env", "OPENAI_API_KEY"))

        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)
        self.OPENAI_API_KEY: str | None = os.getenv(openai_env)

        self.MSG_MODEL_ID: str = str(
            models_cfg.get("message_model") or os.getenv("MSG_MODEL_ID", "gpt-4o-mini")
        )
        self.ADVANCED_MODEL_ID: str = str(
            models_cfg.get("advanced_model") or os.getenv("ADVANCED_MODEL_ID", "gpt-4o")
        )

        self.CONTEXT_LENGTH: int = int(limits_cfg.get("context_length", os.getenv("CONTEXT_LENGTH", "20")))
        self.MAX_CONTEXT_LENGTH: int = int(
            limits_cfg.get("max_context_length", os.getenv("MAX_CONTEXT_LENGTH", "100"))
        )
        self.MAX_REPLY_LENGTH: int = int(limits_cfg.get("max_reply_length", os.getenv("MAX_REPLY_LENGTH", "2000")))

        required = [
            (token_env, self.DISCORD_API_TOKEN),
            (openai_env, self.OPENAI_API_KEY),
        ]
        missing = [name for name, val in required if not val]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")
