from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.toml")
CONFIG_PATH_ENV = "CHATTERBOX_CONFIG"


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Explicit ``path`` first, then ``$CHATTERBOX_CONFIG``, then ./config.toml."""
    if path is not None:
        return Path(path)
    from_env = os.getenv(CONFIG_PATH_ENV)
    return Path(from_env) if from_env else DEFAULT_CONFIG_PATH


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the optional TOML config.

    Every section is optional; an absent file yields ``{}`` and each config
    class falls back to environment variables (``.env`` included).
    """
    target = resolve_config_path(path)
    if not target.is_file():
        logger.debug("No config file at %s; using environment only", target)
        return {}

    with target.open("rb") as handle:
        raw = tomllib.load(handle)
    logger.info("Loaded config from %s", target)
    return raw


__all__ = ["load_raw_config", "resolve_config_path", "DEFAULT_CONFIG_PATH", "CONFIG_PATH_ENV"]
