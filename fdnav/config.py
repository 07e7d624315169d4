"""JSON config loading.

Reads optional defaults for enumeration and display. Access is defensive:
malformed or missing config falls back to built-in defaults. Nothing is
ever written back.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "fdnav"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_TICK_MS = 16


@dataclass(frozen=True)
class Settings:
    show_hidden: bool = False
    max_depth: int | None = None
    follow_links: bool = False
    enumerator: str | None = None
    theme: str | None = None
    no_color: bool = False
    tick_ms: int = DEFAULT_TICK_MS


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _nonempty_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_settings() -> Settings:
    """Build settings from config, ignoring values of the wrong type."""
    data = load_config()
    show_hidden = data.get("show_hidden")
    follow_links = data.get("follow_links")
    return Settings(
        show_hidden=show_hidden if isinstance(show_hidden, bool) else False,
        max_depth=_positive_int(data.get("max_depth")),
        follow_links=follow_links if isinstance(follow_links, bool) else False,
        enumerator=_nonempty_str(data.get("enumerator")),
        theme=_nonempty_str(data.get("theme")),
        tick_ms=_positive_int(data.get("tick_ms")) or DEFAULT_TICK_MS,
    )


def merge_overrides(settings: Settings, **overrides: object) -> Settings:
    """Return ``settings`` with every non-``None`` override applied."""
    applied = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **applied)
