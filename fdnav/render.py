"""View-model construction and frame composition.

``build_view_model`` turns navigator state into plain rows with highlight
ranges. ``render_screen`` is the thin ANSI adapter the runtime writes out;
it positions rows absolutely and clears each line it touches.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from .session import Navigator
from .ui_theme import UITheme

PROMPT_PREFIX = "> "
HEADER_ROWS = 2


@dataclass(frozen=True)
class ViewRow:
    text: str
    highlight_ranges: tuple[tuple[int, int], ...] = ()


@dataclass(frozen=True)
class ViewModel:
    visible_rows: tuple[ViewRow, ...]
    status_line: str
    prompt_line: str
    error: bool = False


def content_rows(term_rows: int) -> int:
    """Rows left for results below the prompt and status lines."""
    return max(0, term_rows - HEADER_ROWS)


def highlight_ranges(positions: tuple[int, ...] | list[int]) -> tuple[tuple[int, int], ...]:
    """Coalesce sorted match offsets into half-open ``(start, end)`` ranges."""
    ranges: list[tuple[int, int]] = []
    for pos in positions:
        if ranges and ranges[-1][1] == pos:
            ranges[-1] = (ranges[-1][0], pos + 1)
        else:
            ranges.append((pos, pos + 1))
    return tuple(ranges)


def format_status_line(navigator: Navigator) -> str:
    state = navigator.state
    store = navigator.store
    parts = [f"{store.matched_count}/{len(store)}"]
    if state.enumerating:
        parts.append("scanning")
    if state.last_error:
        parts.append(f"error: {state.last_error}")
    parts.append(str(state.current_directory))
    return "  ".join(parts)


def build_view_model(navigator: Navigator, max_rows: int) -> ViewModel:
    """Snapshot the top ``max_rows`` entries and the status/prompt lines."""
    rows = tuple(
        ViewRow(text=entry.text, highlight_ranges=highlight_ranges(entry.positions))
        for entry in navigator.store.snapshot_visible(max_rows)
    )
    return ViewModel(
        visible_rows=rows,
        status_line=format_status_line(navigator),
        prompt_line=PROMPT_PREFIX + navigator.state.query,
        error=navigator.state.last_error is not None,
    )


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns; East Asian wide/fullwidth characters
    consume two. Control characters are rendered as one placeholder cell.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def _sanitize_char(ch: str) -> str:
    if ch == "\t" or not ch.isprintable():
        return "?"
    return ch


def styled_row(
    text: str,
    ranges: tuple[tuple[int, int], ...],
    max_cols: int,
    base_style: str,
    match_style: str,
    reset: str,
) -> str:
    """Clip ``text`` to ``max_cols`` cells and wrap highlighted ranges in styles."""
    if max_cols <= 0:
        return ""
    out: list[str] = [base_style]
    col = 0
    range_idx = 0
    highlighted = False
    for idx, raw_ch in enumerate(text):
        ch = _sanitize_char(raw_ch)
        width = char_display_width(ch)
        if col + width > max_cols:
            break
        while range_idx < len(ranges) and ranges[range_idx][1] <= idx:
            range_idx += 1
        want_highlight = range_idx < len(ranges) and ranges[range_idx][0] <= idx
        if want_highlight != highlighted:
            if want_highlight:
                out.append(match_style)
            else:
                out.append(reset + base_style)
            highlighted = want_highlight
        out.append(ch)
        col += width
    out.append(reset)
    return "".join(out)


def render_screen(view: ViewModel, term_rows: int, term_cols: int, theme: UITheme) -> str:
    """Compose one full frame, leaving the cursor at the end of the prompt."""
    out: list[str] = ["\033[H"]
    prompt_style = theme.prompt
    out.append("\033[2K")
    out.append(prompt_style + PROMPT_PREFIX + theme.reset)
    query = view.prompt_line[len(PROMPT_PREFIX):]
    out.append(styled_row(query, (), max(0, term_cols - len(PROMPT_PREFIX)), theme.query, "", theme.reset))

    if term_rows >= 2:
        status_style = theme.status_error if view.error else theme.status
        out.append("\033[2;1H\033[2K")
        out.append(styled_row(view.status_line, (), term_cols, status_style, "", theme.reset))

    for offset in range(content_rows(term_rows)):
        out.append(f"\033[{offset + HEADER_ROWS + 1};1H\033[2K")
        if offset < len(view.visible_rows):
            row = view.visible_rows[offset]
            base = theme.row_best if offset == 0 else theme.row
            out.append(styled_row(row.text, row.highlight_ranges, term_cols, base, theme.match, theme.reset))

    cursor_col = min(term_cols, len(PROMPT_PREFIX) + _display_width(query) + 1)
    out.append(f"\033[1;{max(1, cursor_col)}H")
    return "".join(out)


def _display_width(text: str) -> int:
    return sum(char_display_width(_sanitize_char(ch)) for ch in text)
