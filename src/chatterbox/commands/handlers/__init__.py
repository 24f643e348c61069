"""
Auto-discovery & registry for server config command handlers.

Any file inside commands/handlers/ that defines::

    from . import register

    @register
    class MyCommandHandler:
        command_str = "myCommand"
        pattern = re.compile(r"--myCommand", re.IGNORECASE)
        priority = 60

        @staticmethod
        def handle(community_id: str, match: re.Match, store: SettingsRepository) -> str: ...

is picked up automatically at import-time. Handlers are tried in ascending
``priority`` order and the first whose ``pattern`` matches wins.

NOTE: If adding a new handler, ensure:
1. It has a unique 'command_str' string and 'priority'.
2. It implements the CommandHandler protocol (see below).
3. It is placed in this directory (commands/handlers/).
"""
from __future__ import annotations

import re
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from typing import Dict, List, Protocol

from chatterbox.settings import SettingsRepository


class CommandHandler(Protocol):
    """Protocol for command handler classes."""

    command_str: str
    pattern: re.Pattern[str]
    priority: int

    @staticmethod
    def handle(community_id: str, match: re.Match[str], store: SettingsRepository) -> str:
        """Run the command and return the reply text.

        :param community_id: Server the command was sent in.
        :param match: Match of ``pattern`` against the message text.
        :param store: Settings repository to read and mutate.
        """


_REGISTRY: Dict[str, CommandHandler] = {}


def register(cls: CommandHandler):
    """Decorator that registers a ``CommandHandler`` implementation.

    :param cls: Class implementing the handler protocol.
    :returns: The class unchanged.
    """
    if cls.command_str in _REGISTRY:
        raise ValueError(f"Command {cls.command_str!r} registered twice")
    _REGISTRY[cls.command_str] = cls
    return cls


def ordered() -> List[CommandHandler]:
    """Return handlers in matching order."""
    return sorted(_REGISTRY.values(), key=lambda handler: handler.priority)


# ------------------------------------------------------------------ #
# Auto-import sibling modules to populate registry
# ------------------------------------------------------------------ #
_pkg_path = Path(__file__).resolve().parent
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname != "__init__":
        import_module(f"{__name__}.{modname}")
