"""
Sparse character grid operations and frame composition.

A layer is a plain dict keyed by Coordinate. Two layers exist at runtime:
the committed diagram and the transient preview. compose() flattens both
into a dense block of rows for the renderer.
"""

from __future__ import annotations

from grid_types import BLANK, Coordinate, Layer, Viewport

__all__ = ["insert_char", "remove_char", "merge_layers", "compose", "frame_text"]


def _check_glyph(ch: str) -> None:
    if len(ch) != 1:
        raise ValueError(f"A cell holds exactly one character, got {ch!r}")


def insert_char(layer: Layer, pos: Coordinate, ch: str) -> None:
    """Set the character at pos, replacing whatever was there."""
    _check_glyph(ch)
    layer[pos] = ch


def remove_char(layer: Layer, pos: Coordinate) -> None:
    """Clear the cell at pos. Clearing an empty cell is fine."""
    layer.pop(pos, None)


def merge_layers(target: Layer, overlay: Layer) -> None:
    """Copy every overlay cell into target; overlay cells win on conflict."""
    target.update(overlay)


def compose(viewport: Viewport, diagram: Layer, preview: Layer) -> list[str]:
    """
    Flatten the diagram and preview into exactly viewport.height rows.

    Each row is exactly viewport.width characters. Preview cells take
    precedence over diagram cells; unoccupied cells are spaces. Cells outside
    the viewport are kept in the layers but not rendered.

    Args:
        viewport: Size of the visible area
        diagram: Committed layer
        preview: Overlay layer

    Returns:
        List of row strings, top to bottom
    """
    rows: list[str] = []
    for y in range(viewport.height):
        row: list[str] = []
        for x in range(viewport.width):
            pos = Coordinate(x, y)
            if pos in preview:
                row.append(preview[pos])
            else:
                row.append(diagram.get(pos, BLANK))
        rows.append("".join(row))
    return rows


def frame_text(rows: list[str]) -> str:
    """Join composed rows into one string with a line break after each row."""
    return "".join(row + "\n" for row in rows)
