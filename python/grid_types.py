"""
Shared type definitions for the gridsketch editor.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Direction of a single cursor step."""

    RIGHT = "right"  # increasing x
    LEFT = "left"  # decreasing x
    DOWN = "down"  # increasing y
    UP = "up"  # decreasing y
    INDETERMINATE = "indeterminate"  # not a single axis-aligned step


# =============================================================================
# Glyphs
# =============================================================================

HORIZONTAL = "─"
VERTICAL = "│"
TOP_LEFT = "╭"
TOP_RIGHT = "╮"
BOTTOM_LEFT = "╰"
BOTTOM_RIGHT = "╯"

HEAD_RIGHT = "▶"
HEAD_LEFT = "◀"
HEAD_DOWN = "▼"
HEAD_UP = "▲"
HEAD_UNKNOWN = "◆"
JUNCTION = "+"

BLANK = " "


# =============================================================================
# Coordinates
# =============================================================================


@dataclass(frozen=True, order=True)
class Coordinate:
    """A cell position on the grid. Column first, then row."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Coordinate must be non-negative, got ({self.x}, {self.y})")

    def shifted(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Viewport:
    """Visible area in cells, as reported by the host each frame."""

    width: int
    height: int

    def clamp(self, pos: Coordinate) -> Coordinate:
        """Pull a coordinate back inside [0, width) x [0, height)."""
        return Coordinate(
            max(0, min(pos.x, self.width - 1)),
            max(0, min(pos.y, self.height - 1)),
        )


# Sparse cell storage: Coordinate -> single display character.
Layer = dict[Coordinate, str]


# =============================================================================
# Editor Modes
# =============================================================================


@dataclass(frozen=True)
class InsertMode:
    """Typing mode. The preview layer is always empty here."""

    pass


@dataclass(frozen=True)
class BoxMode:
    """Drawing a rectangle from anchor to the cursor."""

    anchor: Coordinate


@dataclass(frozen=True)
class ArrowMode:
    """Drawing an arrow path starting at anchor."""

    anchor: Coordinate


Mode = InsertMode | BoxMode | ArrowMode
