"""Session bootstrap: wire navigator, feed, and terminal, then run the loop."""

from __future__ import annotations

import logging
import os
from functools import partial
from pathlib import Path

from ..config import Settings
from ..enumeration import EnumerationFeed, build_enumerator_command
from ..session import Navigator
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopTiming, run_main_loop, terminal_size_of
from .terminal import TerminalController

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def build_navigator(start_directory: Path, settings: Settings) -> Navigator:
    command = build_enumerator_command(
        show_hidden=settings.show_hidden,
        max_depth=settings.max_depth,
        follow_links=settings.follow_links,
        configured=settings.enumerator,
    )
    logger.info("using enumerator %s", command)
    return Navigator(start_directory, EnumerationFeed(command))


def run_navigator(start_directory: Path, settings: Settings) -> Path:
    """Run one interactive session and return the directory it ended in.

    The UI talks to the controlling terminal directly so stdout stays free
    for the final directory.
    """
    try:
        tty_fd = os.open(TTY_PATH, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise SystemExit(f"fdnav needs an interactive terminal: {exc}") from exc

    navigator = build_navigator(start_directory, settings)
    try:
        terminal = TerminalController(tty_fd, tty_fd)
        navigator.start()
        run_main_loop(
            navigator,
            terminal,
            tty_fd,
            resolve_theme(settings.theme, settings.no_color),
            RuntimeLoopTiming(key_poll_ms=settings.tick_ms),
            terminal_size=partial(terminal_size_of, tty_fd),
        )
    finally:
        navigator.feed.cancel()
        os.close(tty_fd)
    return navigator.state.current_directory
