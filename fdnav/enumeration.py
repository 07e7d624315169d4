"""Background enumeration of directory entries via an external lister.

One reader thread per run streams the lister's stdout into an unbounded queue
as generation-tagged messages. The coordinator drains the queue without
blocking and drops anything tagged with an old generation.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import threading
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from queue import Empty, Queue

logger = logging.getLogger(__name__)

STDERR_TAIL_LINES = 20


@dataclass(frozen=True)
class FeedLine:
    """One path emitted by the enumerator for ``generation``."""

    generation: int
    text: str


@dataclass(frozen=True)
class FeedFinished:
    """Completion marker for one enumeration run.

    ``returncode`` is ``None`` when the process could not be spawned; ``error``
    then carries the reason. Non-zero exits keep whatever stderr tail the
    process produced.
    """

    generation: int
    returncode: int | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and self.error is None


FeedMessage = FeedLine | FeedFinished


def normalize_line(raw: str) -> str:
    """Strip line endings and a leading ``./`` from one lister output line."""
    text = raw.rstrip("\r\n")
    while text.startswith("./"):
        text = text[2:]
    return text


def build_enumerator_command(
    show_hidden: bool = False,
    max_depth: int | None = None,
    follow_links: bool = False,
    configured: str | None = None,
) -> list[str]:
    """Resolve the lister command line.

    A configured command is used verbatim. Otherwise ``fd`` (or Debian's
    ``fdfind``) is preferred, with ``find`` as the fallback.
    """
    if configured:
        return shlex.split(configured)

    fd_binary = shutil.which("fd") or shutil.which("fdfind")
    if fd_binary is not None:
        cmd = [fd_binary, "--color=never"]
        if show_hidden:
            cmd.append("--hidden")
        if max_depth is not None:
            cmd.extend(["--max-depth", str(max_depth)])
        if follow_links:
            cmd.append("--follow")
        return cmd

    cmd = ["find"]
    if follow_links:
        cmd.append("-L")
    cmd.extend([".", "-mindepth", "1"])
    if max_depth is not None:
        cmd.extend(["-maxdepth", str(max_depth)])
    if not show_hidden:
        cmd.extend(["-not", "-path", "*/.*"])
    return cmd


class EnumerationFeed:
    """Restartable producer of ``(generation, path)`` messages.

    Only one run is active at a time. Starting a new run terminates the
    previous process best-effort; correctness relies on generation tags, which
    the consumer must compare against its own generation.
    """

    def __init__(self, command: Sequence[str]) -> None:
        self.command = list(command)
        self._lock = threading.Lock()
        self._messages: Queue[FeedMessage] = Queue()
        self._process: subprocess.Popen[str] | None = None
        self._active_generation = 0
        self._running = False

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    @property
    def active_generation(self) -> int:
        with self._lock:
            return self._active_generation

    def start(self, root: Path, generation: int) -> None:
        """Begin enumerating ``root``, tagging all output with ``generation``."""
        self.cancel()
        with self._lock:
            self._active_generation = generation
            self._running = True

        try:
            process = subprocess.Popen(
                self.command,
                cwd=root,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            logger.warning("enumerator %r failed to start in %s: %s", self.command, root, exc)
            with self._lock:
                if self._active_generation == generation:
                    self._running = False
            self._messages.put(FeedFinished(generation=generation, returncode=None, error=str(exc)))
            return

        with self._lock:
            self._process = process
        logger.debug("enumerator pid=%s started for %s (generation %d)", process.pid, root, generation)

        stderr_tail: deque[str] = deque(maxlen=STDERR_TAIL_LINES)
        stderr_thread = threading.Thread(
            target=self._drain_stderr,
            args=(process, stderr_tail),
            name=f"fdnav-enum-stderr-{generation}",
            daemon=True,
        )
        stderr_thread.start()
        reader = threading.Thread(
            target=self._read_stdout,
            args=(process, generation, stderr_thread, stderr_tail),
            name=f"fdnav-enum-{generation}",
            daemon=True,
        )
        reader.start()

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return self._active_generation == generation

    @staticmethod
    def _drain_stderr(process: subprocess.Popen[str], tail: deque[str]) -> None:
        assert process.stderr is not None
        for raw in process.stderr:
            line = raw.strip()
            if line:
                tail.append(line)

    def _read_stdout(
        self,
        process: subprocess.Popen[str],
        generation: int,
        stderr_thread: threading.Thread,
        stderr_tail: deque[str],
    ) -> None:
        assert process.stdout is not None
        for raw in process.stdout:
            if not self._is_current(generation):
                # Superseded; stop forwarding but keep the pipe drained.
                continue
            text = normalize_line(raw)
            if text:
                self._messages.put(FeedLine(generation=generation, text=text))

        returncode = process.wait()
        stderr_thread.join(timeout=1.0)
        error: str | None = None
        if returncode != 0 and self._is_current(generation):
            error = stderr_tail[-1] if stderr_tail else f"exit status {returncode}"
            logger.warning(
                "enumerator exited with status %d (generation %d): %s",
                returncode,
                generation,
                "; ".join(stderr_tail) or "no stderr",
            )

        with self._lock:
            if self._process is process:
                self._process = None
            if self._active_generation == generation:
                self._running = False
        self._messages.put(FeedFinished(generation=generation, returncode=returncode, error=error))

    def cancel(self) -> None:
        """Terminate the running process, if any. Never blocks on exit."""
        with self._lock:
            process = self._process
            self._process = None
            self._running = False
        if process is None or process.poll() is not None:
            return
        try:
            process.terminate()
        except OSError as exc:
            logger.debug("failed to terminate enumerator pid=%s: %s", process.pid, exc)

    def drain(self, max_items: int | None = None) -> list[FeedMessage]:
        """Return queued messages without blocking."""
        out: list[FeedMessage] = []
        while max_items is None or len(out) < max_items:
            try:
                out.append(self._messages.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "EnumerationFeed",
    "FeedFinished",
    "FeedLine",
    "FeedMessage",
    "build_enumerator_command",
    "normalize_line",
]
