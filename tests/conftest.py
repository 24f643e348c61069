import os, sys
import tempfile
from pathlib import Path

import pytest

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Ensure required environment variables for Core validation
os.environ.setdefault("DISCORD_API_TOKEN", "test-token")
os.environ.setdefault("OPENAI_API_KEY", "test-openai")
os.environ.setdefault("MSG_MODEL_ID", "regular-model")
os.environ.setdefault("ADVANCED_MODEL_ID", "advanced-model")
os.environ.setdefault(
    "SETTINGS_FILE", str(Path(tempfile.mkdtemp()) / "server_settings.json")
)


@pytest.fixture
def store(tmp_path, monkeypatch):
    """Fresh settings store, also installed as the process-wide default."""
    from chatterbox import settings
    from chatterbox.settings import JsonSettingsStore

    fresh = JsonSettingsStore(tmp_path / "server_settings.json")
    monkeypatch.setattr(settings, "_store", fresh)
    return fresh
