"""Exceptions raised by the grid.

Out-of-range coordinates and placements on occupied cells are absorbed
silently; only addressing a node that does not exist is an error.
"""

from __future__ import annotations


class GridError(Exception):
    """Base class for grid errors."""


class MissingNodeError(GridError, LookupError):
    """No compute node exists at an in-range coordinate."""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"no compute node at ({x}, {y})")
