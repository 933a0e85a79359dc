"""
Diagram editing engine: cursor tracking, mode state machine and commits.

One EditorState value owns everything the session mutates. handle() routes a
single logical command through the active mode, then regenerates the preview
for that mode. Nothing here touches the terminal; saving writes the composed
frame to a file and raises SaveError on failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from canvas import compose, frame_text, insert_char, merge_layers, remove_char
from grid_types import ArrowMode, BoxMode, Coordinate, InsertMode, Layer, Mode, Viewport
from shapes import box_preview, extend_arrow

__all__ = [
    "Action",
    "InsertChar",
    "Command",
    "EditorState",
    "SaveError",
    "handle",
    "render_frame",
    "save_frame",
]

logger = logging.getLogger(__name__)


class Action(Enum):
    """Logical commands that carry no payload."""

    START_BOX = "start_box"
    START_ARROW = "start_arrow"
    SAVE = "save"
    QUIT = "quit"
    TOGGLE_COLOR = "toggle_color"
    BACKSPACE = "backspace"
    CONFIRM = "confirm"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"


@dataclass(frozen=True)
class InsertChar:
    """Type one printable character at the cursor."""

    ch: str


Command = Action | InsertChar


_STEPS: dict[Action, tuple[int, int]] = {
    Action.MOVE_LEFT: (-1, 0),
    Action.MOVE_RIGHT: (1, 0),
    Action.MOVE_UP: (0, -1),
    Action.MOVE_DOWN: (0, 1),
}


class SaveError(OSError):
    """Writing the diagram to disk failed. The session can carry on."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not save to {path}: {reason}")
        self.path = path


@dataclass
class EditorState:
    """All mutable session state: both layers, cursor tracking and mode."""

    viewport: Viewport = field(default_factory=lambda: Viewport(80, 24))
    diagram: Layer = field(default_factory=dict)
    preview: Layer = field(default_factory=dict)
    cursor: Coordinate = Coordinate(0, 0)
    previous_cursor: Coordinate = Coordinate(0, 0)
    mode: Mode = InsertMode()
    color: bool = False
    should_quit: bool = False

    @property
    def anchor(self) -> Coordinate | None:
        """Where the current shape started, or None in insert mode."""
        match self.mode:
            case BoxMode(anchor=anchor) | ArrowMode(anchor=anchor):
                return anchor
            case _:
                return None

    def resize(self, viewport: Viewport) -> None:
        """Adopt a new viewport and pull the cursor back inside it."""
        if viewport != self.viewport:
            logger.debug("viewport resized to %dx%d", viewport.width, viewport.height)
        self.viewport = viewport
        self.cursor = viewport.clamp(self.cursor)
        self.previous_cursor = viewport.clamp(self.previous_cursor)

    def move(self, dx: int, dy: int) -> bool:
        """
        Step the cursor by (dx, dy), clamped to the viewport.

        Returns True if the cursor actually moved. A blocked step leaves both
        the cursor and previous_cursor untouched.
        """
        target = self.viewport.clamp(
            Coordinate(max(0, self.cursor.x + dx), max(0, self.cursor.y + dy))
        )
        if target == self.cursor:
            return False
        self.previous_cursor = self.cursor
        self.cursor = target
        return True


# =============================================================================
# Command Handling
# =============================================================================


def handle(state: EditorState, command: Command) -> None:
    """
    Apply one command to the editor state.

    SAVE is accepted but performs no I/O here; the host calls save_frame().
    """
    moved = False

    match command:
        case Action.QUIT:
            state.should_quit = True
        case Action.TOGGLE_COLOR:
            state.color = not state.color
        case Action.START_BOX:
            if not isinstance(state.mode, BoxMode):
                _enter_shape_mode(state, BoxMode(state.cursor))
        case Action.START_ARROW:
            if not isinstance(state.mode, ArrowMode):
                _enter_shape_mode(state, ArrowMode(state.cursor))
        case Action.CONFIRM:
            _confirm(state)
        case Action.BACKSPACE:
            if isinstance(state.mode, InsertMode):
                _backspace(state)
        case Action.MOVE_LEFT | Action.MOVE_RIGHT | Action.MOVE_UP | Action.MOVE_DOWN:
            moved = state.move(*_STEPS[command])
        case InsertChar(ch=ch):
            if isinstance(state.mode, InsertMode):
                _type_char(state, ch)
        case Action.SAVE:
            pass

    _refresh_preview(state, moved)


def _enter_shape_mode(state: EditorState, mode: BoxMode | ArrowMode) -> None:
    if state.preview:
        logger.debug(
            "discarding uncommitted %s preview (%d cells)",
            type(state.mode).__name__,
            len(state.preview),
        )
    state.preview.clear()
    state.mode = mode
    logger.debug("entered %s at (%d, %d)", type(mode).__name__, mode.anchor.x, mode.anchor.y)


def _confirm(state: EditorState) -> None:
    match state.mode:
        case InsertMode():
            # Newline: next row, first column
            state.cursor = state.viewport.clamp(Coordinate(0, state.cursor.y + 1))
        case BoxMode() | ArrowMode():
            logger.debug("committing %d preview cells", len(state.preview))
            merge_layers(state.diagram, state.preview)
            state.preview.clear()
            state.mode = InsertMode()


def _type_char(state: EditorState, ch: str) -> None:
    insert_char(state.diagram, state.cursor, ch)
    state.cursor = state.viewport.clamp(state.cursor.shifted(1, 0))


def _backspace(state: EditorState) -> None:
    if state.cursor.x == 0:
        return
    state.cursor = state.cursor.shifted(-1, 0)
    remove_char(state.diagram, state.cursor)


def _refresh_preview(state: EditorState, moved: bool) -> None:
    match state.mode:
        case InsertMode():
            state.preview.clear()
        case BoxMode(anchor=anchor):
            state.preview.clear()
            state.preview.update(box_preview(anchor, state.cursor))
        case ArrowMode(anchor=anchor):
            if moved:
                extend_arrow(state.preview, anchor, state.previous_cursor, state.cursor)


# =============================================================================
# Output
# =============================================================================


def render_frame(state: EditorState) -> str:
    """Composite both layers for the current viewport as newline-terminated rows."""
    return frame_text(compose(state.viewport, state.diagram, state.preview))


def save_frame(state: EditorState, path: str | Path) -> Path:
    """
    Write the current frame verbatim to path.

    Raises:
        SaveError: if the file cannot be written
    """
    path = Path(path)
    text = render_frame(state)
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise SaveError(path, exc.strerror or str(exc)) from exc
    logger.info("saved %dx%d frame to %s", state.viewport.width, state.viewport.height, path)
    return path
