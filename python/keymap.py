"""
Default key bindings: raw readchar keys -> logical editor commands.

Only keys that readchar.readkey() hands back whole can be bound. A lone Esc
never arrives on its own (readkey waits for the rest of an escape sequence),
and the terminal keeps flow-control and signal keys such as Ctrl+S and Ctrl+Q.
"""

from __future__ import annotations

from dataclasses import dataclass

from readchar import key

from editor import Action, Command, InsertChar

__all__ = ["KeyBinding", "DEFAULT_BINDINGS", "command_for_key", "describe_bindings"]


@dataclass(frozen=True)
class KeyBinding:
    """A physical key, its label for the help panel, and what it does."""

    key: str
    label: str
    action: Action


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(key.CTRL_B, "Ctrl+B", Action.START_BOX),
    KeyBinding(key.CTRL_A, "Ctrl+A", Action.START_ARROW),
    KeyBinding(key.CTRL_W, "Ctrl+W", Action.SAVE),
    KeyBinding(key.CTRL_T, "Ctrl+T", Action.TOGGLE_COLOR),
    KeyBinding(key.CTRL_X, "Ctrl+X", Action.QUIT),
    KeyBinding(key.ENTER, "Enter", Action.CONFIRM),
    KeyBinding(key.LF, "Enter", Action.CONFIRM),
    KeyBinding(key.BACKSPACE, "Backspace", Action.BACKSPACE),
    KeyBinding(key.CTRL_H, "Backspace", Action.BACKSPACE),
    KeyBinding(key.LEFT, "Left", Action.MOVE_LEFT),
    KeyBinding(key.RIGHT, "Right", Action.MOVE_RIGHT),
    KeyBinding(key.UP, "Up", Action.MOVE_UP),
    KeyBinding(key.DOWN, "Down", Action.MOVE_DOWN),
)

_BY_KEY: dict[str, Action] = {binding.key: binding.action for binding in DEFAULT_BINDINGS}


def command_for_key(pressed: str, bindings: dict[str, Action] | None = None) -> Command | None:
    """
    Translate one key press into a command.

    Bound keys map to their action. Any other single printable character
    becomes InsertChar. Everything else (unbound escape sequences, control
    characters) yields None.
    """
    table = _BY_KEY if bindings is None else bindings
    action = table.get(pressed)
    if action is not None:
        return action
    if len(pressed) == 1 and pressed.isprintable():
        return InsertChar(pressed)
    return None


def describe_bindings() -> list[tuple[str, str]]:
    """(label, action name) pairs for the help panel, without duplicates."""
    seen: set[tuple[str, str]] = set()
    pairs: list[tuple[str, str]] = []
    for binding in DEFAULT_BINDINGS:
        pair = (binding.label, binding.action.value.replace("_", " "))
        if pair not in seen:
            seen.add(pair)
            pairs.append(pair)
    return pairs
