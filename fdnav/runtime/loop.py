"""Main interactive event loop for the terminal UI.

Each tick polls at most one key, drains a bounded batch of enumeration
output, then renders if anything changed. Nothing in the loop blocks longer
than the key poll timeout.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from ..input import apply_command, command_for_key, read_key
from ..render import build_view_model, content_rows, render_screen
from ..session import Navigator
from ..ui_theme import UITheme
from .terminal import TerminalController

FALLBACK_TERMINAL_SIZE = os.terminal_size((80, 24))


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_poll_ms: int = 16
    feed_batch_limit: int = 2_000


def terminal_size_of(fd: int) -> os.terminal_size:
    """Size of the terminal behind ``fd``; 80x24 when it is not a tty."""
    try:
        return os.get_terminal_size(fd)
    except OSError:
        return FALLBACK_TERMINAL_SIZE


def run_main_loop(
    navigator: Navigator,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    terminal_size: Callable[[], os.terminal_size] | None = None,
) -> None:
    """Run the interactive loop until the navigator requests quit.

    The screen size is read from the terminal's output fd, not stdout,
    since stdout may be a pipe.
    """
    if terminal_size is None:
        terminal_size = partial(terminal_size_of, terminal.stdout_fd)
    last_size: os.terminal_size | None = None
    dirty = True

    with terminal.raw_mode():
        while not navigator.state.quit_requested:
            key = read_key(stdin_fd, timeout_ms=timing.key_poll_ms)
            command = command_for_key(key)
            if command is not None and apply_command(navigator, command):
                dirty = True
            if navigator.state.quit_requested:
                break

            if navigator.pump_feed(timing.feed_batch_limit):
                dirty = True

            size = terminal_size()
            if size != last_size:
                last_size = size
                dirty = True
            if dirty:
                view = build_view_model(navigator, content_rows(size.lines))
                terminal.write(render_screen(view, size.lines, size.columns, theme))
                dirty = False
