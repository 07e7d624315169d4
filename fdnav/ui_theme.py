"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the prompt, status line, and result rows.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    prompt: str
    query: str
    status: str
    status_error: str
    row: str
    row_best: str
    match: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    prompt="\033[1;38;5;81m",
    query="\033[1m",
    status="\033[2;38;5;250m",
    status_error="\033[38;5;203m",
    row="\033[38;5;252m",
    row_best="\033[1;38;5;255m",
    match="\033[1;38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    prompt="\033[1;38;5;45m",
    query="\033[1;38;5;153m",
    status="\033[2;38;5;110m",
    status_error="\033[38;5;209m",
    row="\033[38;5;252m",
    row_best="\033[1;38;5;117m",
    match="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    prompt="",
    query="",
    status="",
    status_error="",
    row="",
    row_best="",
    match="",
)

_THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME)}


def available_theme_names() -> tuple[str, ...]:
    return tuple(_THEMES)


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the named theme, falling back to the default for unknown names."""
    if no_color:
        return PLAIN_THEME
    if name is None:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)
