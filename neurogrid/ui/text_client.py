"""Plain-text rendering of a grid, one glyph per cell."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from neurogrid.world.grid import Grid

_UNSEEN = "."
_ANIMAT = "@"


def render(grid: Grid, animat: tuple[int, int] | None = None) -> str:
    """Draw the grid row by row.

    Unmaterialised cells show as ``.``; if ``animat`` is given, that cell is
    drawn as ``@``.

    Args:
        grid: Grid to draw.
        animat: Optional ``(x, y)`` position to highlight.

    Returns:
        ``N + 1`` lines of ``N + 1`` characters joined by newlines.
    """
    rows = []
    for y in range(grid.extent + 1):
        line = []
        for x in range(grid.extent + 1):
            if (x, y) == animat:
                line.append(_ANIMAT)
                continue
            entity = grid.peek(x, y)
            line.append(_UNSEEN if entity is None else entity.kind.glyph)
        rows.append("".join(line))
    return "\n".join(rows)
