"""Command dispatch utilities."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

from chatterbox import settings
from chatterbox.settings import SettingsRepository

from .handlers import CommandHandler, ordered as ordered_handlers

logger = logging.getLogger(__name__)


class CommandInvocation(NamedTuple):
    """Resolved command data for downstream consumers."""

    handler: CommandHandler
    name: str
    match: re.Match[str]


class CommandResult(NamedTuple):
    """Outcome of :func:`dispatch`; ``handled`` means the model is not called."""

    handled: bool
    response: str | None = None


UNHANDLED = CommandResult(handled=False)


def _resolve_command(content: str) -> CommandInvocation | None:
    """Return the first handler whose pattern matches ``content``."""

    for handler in ordered_handlers():
        match = handler.pattern.search(content)
        if match:
            return CommandInvocation(handler=handler, name=handler.command_str, match=match)
    return None


def is_command(content: str) -> bool:
    """Return ``True`` when ``content`` contains a server config command."""

    return _resolve_command(content or "") is not None


def dispatch(
    community_id: str | None,
    content: str,
    store: SettingsRepository | None = None,
) -> CommandResult:
    """
    Execute the first server config command found in ``content``.

    Commands only apply inside a server; ``community_id`` of ``None`` (a DM)
    always yields an unhandled result.
    """

    if community_id is None:
        return UNHANDLED

    invocation = _resolve_command(content or "")
    if not invocation:
        return UNHANDLED

    handler, command, match = invocation
    logger.info("Dispatching command '%s' for server %s", command, community_id)
    response = handler.handle(community_id, match, store or settings.get_store())
    return CommandResult(handled=True, response=response)


__all__ = ["CommandInvocation", "CommandResult", "UNHANDLED", "dispatch", "is_command"]
