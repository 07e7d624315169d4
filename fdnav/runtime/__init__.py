"""Runtime package: terminal control, the event loop, and session bootstrap."""

from .app import build_navigator, run_navigator
from .loop import RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController

__all__ = [
    "RuntimeLoopTiming",
    "TerminalController",
    "build_navigator",
    "run_main_loop",
    "run_navigator",
]
