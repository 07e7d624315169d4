"""Map decoded key tokens onto navigator commands."""

from __future__ import annotations

from dataclasses import dataclass

from ..session import Navigator


@dataclass(frozen=True)
class InsertText:
    text: str


@dataclass(frozen=True)
class Erase:
    pass


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Interrupt:
    pass


@dataclass(frozen=True)
class ClearQuery:
    pass


@dataclass(frozen=True)
class Complete:
    pass


Command = InsertText | Erase | Confirm | Interrupt | ClearQuery | Complete

_KEY_COMMANDS: dict[str, Command] = {
    "BACKSPACE": Erase(),
    "ENTER": Confirm(),
    "CTRL_C": Interrupt(),
    "CTRL_D": Interrupt(),
    "CTRL_U": ClearQuery(),
    "TAB": Complete(),
}


def command_for_key(key: str) -> Command | None:
    """Translate one key token; ``None`` means no input or an ignored key."""
    if not key:
        return None
    command = _KEY_COMMANDS.get(key)
    if command is not None:
        return command
    if len(key) == 1 and key.isprintable():
        return InsertText(key)
    return None


def apply_command(navigator: Navigator, command: Command) -> bool:
    """Run ``command`` against ``navigator``; return whether it changed anything."""
    if isinstance(command, InsertText):
        navigator.insert_text(command.text)
        return True
    if isinstance(command, Erase):
        return navigator.backspace()
    if isinstance(command, Confirm):
        return navigator.descend(navigator.state.query)
    if isinstance(command, Interrupt):
        navigator.quit()
        return True
    if isinstance(command, ClearQuery):
        if not navigator.state.query:
            return False
        navigator.clear_query()
        return True
    if isinstance(command, Complete):
        return navigator.complete_query()
    return False
