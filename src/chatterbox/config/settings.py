import os
from pathlib import Path

_DEFAULT_SETTINGS_FILE = Path("data") / "server_settings.json"


class Settings:
    def __init__(self, config: dict | None = None) -> None:
        settings_cfg = (config or {}).get("chatterbox", {}).get("settings", {})
        self.SETTINGS_FILE: str = str(
            settings_cfg.get("settings_file", os.getenv("SETTINGS_FILE", str(_DEFAULT_SETTINGS_FILE)))
        )
