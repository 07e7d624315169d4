"""Ranked candidate storage for the current directory listing."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .fuzzy import FuzzyMatch, fuzzy_match

Scorer = Callable[[str, str], FuzzyMatch | None]


@dataclass(frozen=True)
class Entry:
    """One enumerated path with its score against the active query.

    ``seq`` is the arrival index and breaks score ties. Entries rejected by
    the scorer keep ``matched=False`` with a zero score and no positions.
    """

    text: str
    score: int = 0
    positions: tuple[int, ...] = ()
    matched: bool = True
    seq: int = 0


def _rank_key(entry: Entry) -> tuple[bool, int, int]:
    return (not entry.matched, -entry.score, entry.seq)


def _scored_entry(text: str, seq: int, match: FuzzyMatch | None) -> Entry:
    if match is None:
        return Entry(text=text, score=0, positions=(), matched=False, seq=seq)
    return Entry(text=text, score=match.score, positions=match.positions, matched=True, seq=seq)


class EntryStore:
    """Ordered entries scored against one query.

    Appends are scored immediately but sorted lazily; every read path sorts
    first, so callers always observe rank order.
    """

    def __init__(self, query: str = "", scorer: Scorer = fuzzy_match) -> None:
        self._scorer = scorer
        self._query = query
        self._entries: list[Entry] = []
        self._next_seq = 0
        self._matched_count = 0
        self._sorted = True

    @property
    def query(self) -> str:
        return self._query

    @property
    def matched_count(self) -> int:
        return self._matched_count

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, text: str) -> Entry:
        entry = _scored_entry(text, self._next_seq, self._scorer(text, self._query))
        self._next_seq += 1
        self._entries.append(entry)
        if entry.matched:
            self._matched_count += 1
        self._sorted = False
        return entry

    def extend(self, texts: Iterable[str]) -> int:
        count = 0
        for text in texts:
            self.append(text)
            count += 1
        return count

    def rescore_all(self, query: str) -> None:
        """Score every entry against ``query`` and restore rank order."""
        self._query = query
        rescored = [
            _scored_entry(entry.text, entry.seq, self._scorer(entry.text, query))
            for entry in self._entries
        ]
        self._entries = rescored
        self._matched_count = sum(1 for entry in rescored if entry.matched)
        self._sort()

    def clear(self, query: str = "") -> None:
        self._entries = []
        self._query = query
        self._next_seq = 0
        self._matched_count = 0
        self._sorted = True

    def _sort(self) -> None:
        self._entries.sort(key=_rank_key)
        self._sorted = True

    def entries(self) -> tuple[Entry, ...]:
        """Return all entries in rank order, unmatched ones last."""
        if not self._sorted:
            self._sort()
        return tuple(self._entries)

    def snapshot_visible(self, max_rows: int) -> tuple[Entry, ...]:
        """Return up to ``max_rows`` matched entries in rank order."""
        if max_rows <= 0:
            return ()
        if not self._sorted:
            self._sort()
        visible: list[Entry] = []
        for entry in self._entries:
            if not entry.matched or len(visible) >= max_rows:
                break
            visible.append(entry)
        return tuple(visible)
