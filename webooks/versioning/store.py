"""
Version keys - cheap staleness checks for cached collections.

Each resource category ("spaces", "folders", ...) has an opaque token
that advances on every committed mutation. Clients poll ``GET /version``
and refetch a collection only when its token changed.

Invariants:
    - Per category, tokens strictly increase with every bump
    - Concurrent bumps of one category never collapse into one advance
    - A reader never sees a category's token go backwards
    - Bumps of different categories do not wait on each other

Tokens are zero-padded decimal strings, so string order equals the
order in which they were issued. Clients should only compare them for
equality.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)

TOKEN_WIDTH = 20
INITIAL_TOKEN = "0" * TOKEN_WIDTH

DEFAULT_CATEGORIES = ("spaces", "folders", "bookmarks", "system")


def _now_micros() -> int:
    return time.time_ns() // 1_000


class _CategoryVersion:
    """Counter for one category. ``value`` is only written under ``lock``."""

    __slots__ = ("lock", "value")

    def __init__(self):
        self.lock = threading.Lock()
        self.value = 0


class VersionKeyStore:
    """
    Process-local map of category -> version token.

    Construct one per application (held on ``app.state``); tests build
    their own instances. Nothing is persisted: after a restart every
    category is back at the initial token and clients refetch once.
    """

    def __init__(
        self,
        categories: tuple[str, ...] = DEFAULT_CATEGORIES,
        clock: Callable[[], int] = _now_micros,
    ):
        self._clock = clock
        self._registry_lock = threading.Lock()
        self._categories: dict[str, _CategoryVersion] = {
            name: _CategoryVersion() for name in categories
        }

    def _entry(self, category: str) -> _CategoryVersion:
        entry = self._categories.get(category)
        if entry is not None:
            return entry
        with self._registry_lock:
            return self._categories.setdefault(category, _CategoryVersion())

    @staticmethod
    def _format(value: int) -> str:
        return str(value).zfill(TOKEN_WIDTH)

    def get(self, category: str) -> str:
        """Current token for a category; the initial token if never bumped."""
        entry = self._categories.get(category)
        if entry is None:
            return INITIAL_TOKEN
        return self._format(entry.value)

    def get_all(self) -> dict[str, str]:
        """Snapshot of every known category."""
        with self._registry_lock:
            entries = list(self._categories.items())
        return {name: self._format(entry.value) for name, entry in entries}

    def bump(self, category: str) -> str:
        """Advance a category's token and return the new one."""
        if not category:
            raise ValueError("Category name is required")
        entry = self._entry(category)
        with entry.lock:
            # The clock may step backwards; the counter never does
            entry.value = max(entry.value + 1, self._clock())
            token = self._format(entry.value)
        logger.debug(f"Version bump: {category} -> {token}")
        return token

    def bump_many(self, *categories: str) -> dict[str, str]:
        """Bump several categories, each independently."""
        return {category: self.bump(category) for category in categories}

    def reset(self) -> None:
        """Forget every bump. Known categories return to the initial token."""
        with self._registry_lock:
            entries = list(self._categories.values())
        # Entries are reset in place so a bump holding one is never lost
        for entry in entries:
            with entry.lock:
                entry.value = 0
