"""
Per-message directives typed inline with a mention.

Supported tokens::

    --advanced | -a                 use the advanced model
    --context=N | -c=N              read N previous messages
    --context N | -c N              same, value in the next token

Directive tokens are removed from the text; everything else, unknown
``--flags`` included, is kept in its original order. A bare ``--context``
takes its value from the next token left after the other directives are
removed, so ``--context -a 5`` reads five messages.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

_ADVANCED_TOKENS = frozenset({"--advanced", "-a"})
_CONTEXT_TOKENS = frozenset({"--context", "-c"})
_CONTEXT_PREFIXES = ("--context=", "-c=")
_LEADING_INT_RE = re.compile(r"[+-]?\d+")


@dataclass(slots=True)
class Directives:
    use_advanced_model: bool = False
    # None: use the configured default
    context_size: int | None = None


def _positive_int(text: str) -> int | None:
    """Parse a leading integer (``"12abc"`` -> 12); ``None`` unless it is > 0."""
    match = _LEADING_INT_RE.match(text)
    if not match:
        return None
    value = int(match.group())
    return value if value > 0 else None


class _Lookahead:
    """Token iterator with a single slot of push-back."""

    def __init__(self, tokens: Iterable[str]) -> None:
        self._tokens: Iterator[str] = iter(tokens)
        self._pending: str | None = None

    def __iter__(self) -> "_Lookahead":
        return self

    def __next__(self) -> str:
        if self._pending is not None:
            token, self._pending = self._pending, None
            return token
        return next(self._tokens)

    def peek(self) -> str | None:
        if self._pending is None:
            self._pending = next(self._tokens, None)
        return self._pending


def _strip_inline(tokens: list[str], directives: Directives) -> list[str]:
    """Apply ``-a`` and ``--context=N`` tokens and return the ones left over."""
    kept = []
    for token in tokens:
        if token in _ADVANCED_TOKENS:
            directives.use_advanced_model = True
        elif token.startswith(_CONTEXT_PREFIXES):
            value = _positive_int(token.split("=")[1])
            if value is not None:
                directives.context_size = value
        else:
            kept.append(token)
    return kept


def parse_directives(text: str) -> tuple[Directives, str]:
    """
    Extract directives from ``text``.

    :returns: The parsed :class:`Directives` and the remaining text joined
        with single spaces.
    """
    directives = Directives()
    remaining: list[str] = []
    tokens = _Lookahead(_strip_inline(text.split(), directives))

    for token in tokens:
        if token in _CONTEXT_TOKENS:
            following = tokens.peek()
            value = _positive_int(following) if following is not None else None
            if value is not None:
                directives.context_size = value
                next(tokens)
                continue

        remaining.append(token)

    residual = " ".join(remaining)
    if residual != text.strip():
        logger.debug("Parsed directives %s from message", directives)
    return directives, residual


__all__ = ["Directives", "parse_directives"]
