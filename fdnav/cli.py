"""Command-line front door for fdnav.

Parses CLI options, merges them over the config file, and configures
diagnostic logging. Then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .config import load_settings, merge_overrides
from .runtime import run_navigator
from .ui_theme import available_theme_names

LOG_FILE_ENV = "FDNAV_LOG_FILE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def configure_logging(log_file: str | None, verbose: bool = False) -> None:
    """Send diagnostics to ``log_file``; the terminal itself stays clean."""
    root = logging.getLogger("fdnav")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = False
    if not log_file:
        root.addHandler(logging.NullHandler())
        return
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fdnav",
        description="Fuzzy-find and navigate directories in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument("--hidden", action="store_true", default=None, help="Include hidden entries.")
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=None,
        help="Limit enumeration depth below the current directory.",
    )
    parser.add_argument("--follow", action="store_true", default=None, help="Follow symbolic links.")
    parser.add_argument("--enumerator", default=None, help="Command that lists entries, one per line.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", default=None, help="Disable color output.")
    parser.add_argument("--log-file", default=None, help=f"Write diagnostics here (or set ${LOG_FILE_ENV}).")
    parser.add_argument("--verbose", action="store_true", help="Log debug details to the log file.")
    parser.add_argument(
        "--print-dir",
        action="store_true",
        help="Print the final directory on exit, e.g. for cd \"$(fdnav --print-dir)\".",
    )
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch an interactive session.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file or os.environ.get(LOG_FILE_ENV), args.verbose)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    settings = merge_overrides(
        load_settings(),
        show_hidden=args.hidden,
        max_depth=args.max_depth,
        follow_links=args.follow,
        enumerator=args.enumerator,
        theme=args.theme,
        no_color=args.no_color,
    )

    try:
        final_directory = run_navigator(path.resolve(), settings)
    except OSError as exc:
        logging.getLogger(__name__).error("terminal I/O failed: %s", exc)
        raise SystemExit(f"fdnav: terminal I/O failed: {exc}") from exc

    if args.print_dir:
        sys.stdout.write(f"{final_directory}\n")


if __name__ == "__main__":
    main()
