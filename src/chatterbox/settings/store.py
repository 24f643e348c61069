"""
Persistent per-server settings.

All servers share one JSON document::

    {"servers": {"<guild id>": {"<setting name>": true | 1.5 | "text", ...}, ...}}

Every mutation re-reads the document, applies the change and writes the whole
document back through a temporary file and :func:`os.replace`, so a failed
write leaves the previous file untouched. I/O problems never reach callers:
lookups fall back to an empty document, while a mutation whose read fails is
logged and skipped so an unreadable file is never overwritten.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Protocol

from .errors import PersistenceFailure
from .schema import FlagType

logger = logging.getLogger(__name__)

ServerSettings = Dict[str, Any]


class SettingsRepository(Protocol):
    """Storage interface consumed by the command handlers and prompt builder."""

    def get(
        self,
        community_id: str,
        key: str,
        default: Any = None,
        expected: type | tuple[type, ...] | FlagType | None = None,
    ) -> Any: ...

    def set(self, community_id: str, key: str, value: Any) -> None: ...

    def update(self, community_id: str, values: Mapping[str, Any]) -> None: ...

    def remove(self, community_id: str, key: str) -> bool: ...

    def list(self, community_id: str) -> ServerSettings: ...


def _empty_document() -> dict:
    return {"servers": {}}


def _matches(value: Any, expected: type | tuple[type, ...] | FlagType) -> bool:
    if isinstance(expected, FlagType):
        return expected.matches(value)
    # bool is an int subclass; only accept it when asked for explicitly
    if isinstance(value, bool):
        wanted = expected if isinstance(expected, tuple) else (expected,)
        return bool in wanted
    return isinstance(value, expected)


class JsonSettingsStore:
    """Settings repository backed by a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------ #
    # Document I/O
    # ------------------------------------------------------------------ #

    def _read(self) -> dict:
        """Load the document, creating it on first use."""
        if not self.path.exists():
            document = _empty_document()
            self._write(document)
            return document

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"Could not read {self.path}: {exc}") from exc

        if not isinstance(document, dict):
            document = _empty_document()
        servers = document.get("servers")
        if not isinstance(servers, dict):
            servers = document["servers"] = {}
        for community_id, current in servers.items():
            if not isinstance(current, dict):
                logger.warning("Discarding malformed settings record for server %s", community_id)
                servers[community_id] = {}
        return document

    def _write(self, document: dict) -> None:
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as exc:
            tmp.unlink(missing_ok=True)
            raise PersistenceFailure(f"Could not write {self.path}: {exc}") from exc

    def _load(self) -> dict:
        """Read the document, failing open to an empty one."""
        try:
            return self._read()
        except PersistenceFailure as exc:
            logger.error("Error loading server settings: %s", exc)
            return _empty_document()

    def _load_for_update(self) -> dict | None:
        """Read the document for a mutation; ``None`` means leave the file alone."""
        try:
            return self._read()
        except PersistenceFailure as exc:
            logger.error("Error loading server settings, change not saved: %s", exc)
            return None

    def _save(self, document: dict) -> None:
        try:
            self._write(document)
        except PersistenceFailure as exc:
            logger.error("Error saving server settings: %s", exc)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def list(self, community_id: str) -> ServerSettings:
        """Return a copy of every setting stored for ``community_id``."""
        with self._lock:
            servers = self._load()["servers"]
        current = servers.get(community_id)
        return dict(current) if isinstance(current, dict) else {}

    def get(
        self,
        community_id: str,
        key: str,
        default: Any = None,
        expected: type | tuple[type, ...] | FlagType | None = None,
    ) -> Any:
        """
        Return the stored value for ``key`` or ``default``.

        When ``expected`` is given, a stored value of another shape is treated
        as absent so callers never see e.g. a string where they asked for a bool.
        """
        value = self.list(community_id).get(key)
        if value is None:
            return default
        if expected is not None and not _matches(value, expected):
            logger.warning(
                "Setting %r for server %s has unexpected value %r; ignoring",
                key,
                community_id,
                value,
            )
            return default
        return value

    def set(self, community_id: str, key: str, value: Any) -> None:
        self.update(community_id, {key: value})

    def update(self, community_id: str, values: Mapping[str, Any]) -> None:
        """Merge ``values`` into the server's settings in a single write."""
        with self._lock:
            document = self._load_for_update()
            if document is None:
                return
            current = document["servers"].setdefault(community_id, {})
            current.update(values)
            self._save(document)
        logger.info("Updated settings %s for server %s", sorted(values), community_id)

    def remove(self, community_id: str, key: str) -> bool:
        """Delete ``key``; return ``True`` only if something was removed."""
        with self._lock:
            document = self._load_for_update()
            if document is None:
                return False
            current = document["servers"].get(community_id)
            if not isinstance(current, dict) or key not in current:
                return False
            del current[key]
            self._save(document)
        logger.info("Removed setting %r for server %s", key, community_id)
        return True

    def remove_community(self, community_id: str) -> bool:
        """Drop every setting of ``community_id``."""
        with self._lock:
            document = self._load_for_update()
            if document is None or community_id not in document["servers"]:
                return False
            del document["servers"][community_id]
            self._save(document)
        logger.info("Removed all settings for server %s", community_id)
        return True

    def communities(self) -> list[str]:
        """Return the ids of servers that have a settings record."""
        with self._lock:
            return list(self._load()["servers"].keys())


__all__ = ["JsonSettingsStore", "SettingsRepository", "ServerSettings"]
