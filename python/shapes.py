"""
Preview generators for the two shape modes.

Box previews are regenerated from scratch on every event: the outline is a
pure function of the anchor and the cursor.

Arrow previews are extended one step at a time. The head glyph always sits
on the current tip; when the tip moves on, the glyph it leaves behind is
rewritten into a straight connector or a rounded corner depending on the
direction the line was travelling and the direction it takes next.
"""

from __future__ import annotations

from grid_types import (
    BOTTOM_LEFT,
    BOTTOM_RIGHT,
    HEAD_DOWN,
    HEAD_LEFT,
    HEAD_RIGHT,
    HEAD_UNKNOWN,
    HEAD_UP,
    HORIZONTAL,
    JUNCTION,
    TOP_LEFT,
    TOP_RIGHT,
    VERTICAL,
    Coordinate,
    Direction,
    Layer,
)

__all__ = [
    "box_preview",
    "classify_direction",
    "head_glyph",
    "connector_glyph",
    "extend_arrow",
]


# =============================================================================
# Box
# =============================================================================


def box_preview(anchor: Coordinate, cursor: Coordinate) -> Layer:
    """
    Build the rounded rectangle outline spanning anchor and cursor.

    Corners are normalized with min/max, so the outline does not depend on
    which corner the cursor sits at. When anchor == cursor all four corner
    writes hit the same cell and the bottom-right corner wins.
    """
    left, right = min(anchor.x, cursor.x), max(anchor.x, cursor.x)
    top, bottom = min(anchor.y, cursor.y), max(anchor.y, cursor.y)

    preview: Layer = {}
    for x in range(left, right):
        preview[Coordinate(x, top)] = HORIZONTAL
        preview[Coordinate(x, bottom)] = HORIZONTAL
    for y in range(top, bottom):
        preview[Coordinate(left, y)] = VERTICAL
        preview[Coordinate(right, y)] = VERTICAL

    # Order matters for the single-cell case
    preview[Coordinate(left, top)] = TOP_LEFT
    preview[Coordinate(right, top)] = TOP_RIGHT
    preview[Coordinate(left, bottom)] = BOTTOM_LEFT
    preview[Coordinate(right, bottom)] = BOTTOM_RIGHT
    return preview


# =============================================================================
# Arrow
# =============================================================================


_HEADS: dict[Direction, str] = {
    Direction.RIGHT: HEAD_RIGHT,
    Direction.LEFT: HEAD_LEFT,
    Direction.DOWN: HEAD_DOWN,
    Direction.UP: HEAD_UP,
    Direction.INDETERMINATE: HEAD_UNKNOWN,
}

# previous head glyph -> next direction -> glyph left behind at the old tip
_CONNECTORS: dict[str, dict[Direction, str]] = {
    HEAD_RIGHT: {
        Direction.RIGHT: HORIZONTAL,
        Direction.LEFT: HORIZONTAL,
        Direction.DOWN: TOP_RIGHT,
        Direction.UP: BOTTOM_RIGHT,
    },
    HEAD_LEFT: {
        Direction.RIGHT: HORIZONTAL,
        Direction.LEFT: HORIZONTAL,
        Direction.DOWN: TOP_LEFT,
        Direction.UP: BOTTOM_LEFT,
    },
    HEAD_DOWN: {
        Direction.RIGHT: BOTTOM_LEFT,
        Direction.LEFT: BOTTOM_RIGHT,
        Direction.DOWN: VERTICAL,
        Direction.UP: VERTICAL,
    },
    HEAD_UP: {
        Direction.RIGHT: TOP_LEFT,
        Direction.LEFT: TOP_RIGHT,
        Direction.DOWN: VERTICAL,
        Direction.UP: VERTICAL,
    },
}


def classify_direction(prev: Coordinate, cur: Coordinate) -> Direction:
    """
    Infer the step direction from prev to cur.

    Checks run in the order right, left, down, up, each on a single axis.
    Anything that matches none of them (a standstill or a multi-cell jump)
    is INDETERMINATE.
    """
    if prev.x + 1 == cur.x:
        return Direction.RIGHT
    if prev.x - 1 == cur.x:
        return Direction.LEFT
    if prev.y + 1 == cur.y:
        return Direction.DOWN
    if prev.y - 1 == cur.y:
        return Direction.UP
    return Direction.INDETERMINATE


def head_glyph(direction: Direction) -> str:
    """Arrow tip glyph for a line travelling in direction."""
    return _HEADS[direction]


def connector_glyph(previous_head: str, direction: Direction) -> str | None:
    """
    Glyph that replaces previous_head once the line continues in direction.

    Returns None when previous_head is not one of the four directional heads,
    meaning the cell should be left alone.
    """
    table = _CONNECTORS.get(previous_head)
    if table is None:
        return None
    return table.get(direction, JUNCTION)


def extend_arrow(preview: Layer, anchor: Coordinate, prev: Coordinate, cur: Coordinate) -> Direction:
    """
    Extend an arrow preview in place by the step prev -> cur.

    The first step out of the anchor treats the anchor as if the line had
    already been travelling in the new direction, so a straight start renders
    as a straight connector rather than an empty cell.

    Args:
        preview: Arrow preview layer, mutated in place
        anchor: Cell where the arrow started
        prev: Cursor position before the step
        cur: Cursor position after the step

    Returns:
        The direction classified for this step
    """
    direction = classify_direction(prev, cur)

    if prev == anchor and prev not in preview:
        preview[prev] = head_glyph(direction)

    preview[cur] = head_glyph(direction)

    previous = preview.get(prev)
    if previous is not None:
        replacement = connector_glyph(previous, direction)
        if replacement is not None:
            preview[prev] = replacement

    return direction
