"""Fuzzy subsequence scoring for candidate paths.

Matching is case-insensitive and order-preserving. Scores favour consecutive
runs and word-boundary hits and penalise gaps and long candidates.
"""

from __future__ import annotations

from typing import NamedTuple

BOUNDARY_CHARS = "/_- ."


class FuzzyMatch(NamedTuple):
    """Score plus the candidate offsets that matched the query."""

    score: int
    positions: tuple[int, ...]


EMPTY_QUERY_MATCH = FuzzyMatch(0, ())


def _fold_chars(text: str) -> list[str]:
    # Per-character folding keeps offsets aligned with the original string.
    return [ch.casefold() for ch in text]


def _forward_positions(folded: list[str], needles: list[str], start: int) -> list[int] | None:
    positions: list[int] = []
    idx = start
    n = len(folded)
    for needle in needles:
        while idx < n and folded[idx] != needle:
            idx += 1
        if idx >= n:
            return None
        positions.append(idx)
        idx += 1
    return positions


def _tightest_start(folded: list[str], needles: list[str], end: int) -> int:
    """Walk backwards from ``end`` to find the latest start that still aligns."""
    idx = end
    for needle in reversed(needles):
        while folded[idx] != needle:
            idx -= 1
        idx -= 1
    return idx + 1


def score_positions(candidate: str, positions: list[int] | tuple[int, ...]) -> int:
    """Score one alignment of query characters onto ``candidate``."""
    score = 0
    prev_idx = -1
    run = 0
    for idx in positions:
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate[idx - 1] in BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(candidate) // 5
    return score


def fuzzy_match(candidate: str, query: str) -> FuzzyMatch | None:
    """Align ``query`` onto ``candidate`` as a subsequence.

    Returns ``(0, ())`` for an empty query and ``None`` when no alignment
    exists. The greedy leftmost alignment is compared with one re-anchored at
    the tightest window ending on the last greedy hit; the better-scoring of
    the two wins, with the leftmost alignment kept on ties.
    """
    if not query:
        return EMPTY_QUERY_MATCH
    if len(query) > len(candidate):
        return None

    folded = _fold_chars(candidate)
    needles = _fold_chars(query)

    greedy = _forward_positions(folded, needles, 0)
    if greedy is None:
        return None
    best_positions = greedy
    best_score = score_positions(candidate, greedy)

    tight_start = _tightest_start(folded, needles, greedy[-1])
    if tight_start != greedy[0]:
        tight = _forward_positions(folded, needles, tight_start)
        if tight is not None:
            tight_score = score_positions(candidate, tight)
            if tight_score > best_score:
                best_positions = tight
                best_score = tight_score

    return FuzzyMatch(best_score, tuple(best_positions))


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Return only the score of :func:`fuzzy_match`, or ``None`` on no match."""
    match = fuzzy_match(candidate, query)
    if match is None:
        return None
    return match.score
