"""Navigation state machine for one interactive session.

``Navigator`` owns the session state, the entry store, and the enumeration
feed. All mutation happens on the caller's thread; the feed only hands over
generation-tagged messages that ``pump_feed`` filters.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .entries import EntryStore
from .enumeration import FeedFinished, FeedLine, FeedMessage

logger = logging.getLogger(__name__)

FEED_BATCH_LIMIT = 2_000


class Feed(Protocol):
    def start(self, root: Path, generation: int) -> None: ...

    def cancel(self) -> None: ...

    def drain(self, max_items: int | None = None) -> list[FeedMessage]: ...


@dataclass
class SessionState:
    current_directory: Path
    query: str = ""
    generation: int = 0
    enumerating: bool = False
    last_error: str | None = None
    quit_requested: bool = False
    stale_dropped: int = 0


def resolve_directory(path: Path) -> Path | None:
    """Return the canonical directory for ``path`` or ``None`` if unusable."""
    try:
        resolved = path.expanduser().resolve(strict=True)
    except (OSError, RuntimeError):
        return None
    if not resolved.is_dir():
        return None
    if not os.access(resolved, os.R_OK | os.X_OK):
        return None
    return resolved


class Navigator:
    """Directory/query transitions plus feed-to-store delivery."""

    def __init__(self, start_directory: Path, feed: Feed, store: EntryStore | None = None) -> None:
        self.state = SessionState(current_directory=Path(start_directory).resolve())
        self.store = store if store is not None else EntryStore()
        self.feed = feed

    @property
    def generation(self) -> int:
        return self.state.generation

    def start(self) -> None:
        """Start enumerating the initial directory."""
        self._enter_directory(self.state.current_directory)

    def _enter_directory(self, target: Path) -> None:
        state = self.state
        state.current_directory = target
        state.query = ""
        state.generation += 1
        state.enumerating = True
        state.last_error = None
        self.store.clear()
        logger.debug("entering %s (generation %d)", target, state.generation)
        self.feed.start(target, state.generation)

    def edit_query(self, new_query: str) -> None:
        self.state.query = new_query
        self.store.rescore_all(new_query)

    def insert_text(self, text: str) -> None:
        self.edit_query(self.state.query + text)

    def clear_query(self) -> None:
        if self.state.query:
            self.edit_query("")

    def backspace(self) -> bool:
        """Drop the last query character, or ascend when the query is empty."""
        if self.state.query:
            self.edit_query(self.state.query[:-1])
            return True
        return self.ascend()

    def complete_query(self) -> bool:
        """Replace the query with the best-ranked visible entry."""
        top = self.store.snapshot_visible(1)
        if not top or top[0].text == self.state.query:
            return False
        self.edit_query(top[0].text)
        return True

    def descend(self, subpath: str) -> bool:
        """Move into ``current_directory / subpath`` if it is a usable directory.

        Empty subpaths and paths resolving to the current directory are no-ops.
        """
        if not subpath:
            return False
        target = resolve_directory(self.state.current_directory / subpath)
        if target is None:
            logger.debug("descend rejected: %r under %s", subpath, self.state.current_directory)
            return False
        if target == self.state.current_directory:
            return False
        self._enter_directory(target)
        return True

    def ascend(self) -> bool:
        """Move to the parent directory; no-op at the filesystem root."""
        current = self.state.current_directory
        parent = current.parent
        if parent == current:
            return False
        target = resolve_directory(parent)
        if target is None:
            return False
        self._enter_directory(target)
        return True

    def quit(self) -> None:
        self.state.quit_requested = True
        self.state.enumerating = False
        self.feed.cancel()

    def pump_feed(self, max_items: int | None = FEED_BATCH_LIMIT) -> bool:
        """Apply queued feed messages for the current generation.

        Messages from earlier generations are dropped. Returns whether the
        store or enumeration status changed.
        """
        changed = False
        state = self.state
        for message in self.feed.drain(max_items):
            if message.generation != state.generation:
                state.stale_dropped += 1
                continue
            if isinstance(message, FeedLine):
                self.store.append(message.text)
                changed = True
            elif isinstance(message, FeedFinished):
                state.enumerating = False
                if not message.ok:
                    state.last_error = message.error or f"exit status {message.returncode}"
                changed = True
        return changed
