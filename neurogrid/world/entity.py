"""Entity — a typed terrain object occupying one grid cell.

Terrain kinds form a closed set.  Every kind can be built from a coordinate
alone and carries a default stimulus value (``iota``), so copying an entity
is a single structural copy rather than a per-kind branch.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class TerrainKind(Enum):
    """Closed catalogue of terrain variants.

    The value tuple holds the rendering glyph and the default iota.
    """

    GRASS = ("g", 0.0)
    WATER = ("~", 0.2)
    STONE = ("#", 0.0)
    PATH = ("*", 0.0)
    TRAP = ("x", -1.0)
    RESOURCE = ("$", 1.0)

    @property
    def glyph(self) -> str:
        """One-character symbol used by the text renderer."""
        return self.value[0]

    @property
    def default_iota(self) -> float:
        """Stimulus value a freshly built entity of this kind carries."""
        return self.value[1]


DEFAULT_KIND = TerrainKind.GRASS


@dataclass(frozen=True)
class Entity:
    """A positioned terrain value.

    Attributes:
        kind: Terrain variant.
        x: Column position.
        y: Row position.
        iota: Scalar stimulus value.
    """

    kind: TerrainKind
    x: int
    y: int
    iota: float = 0.0

    @classmethod
    def of(cls, kind: TerrainKind, x: int, y: int) -> Entity:
        """Build an entity of ``kind`` at ``(x, y)`` with the kind's default iota."""
        return cls(kind=kind, x=x, y=y, iota=kind.default_iota)

    @property
    def position(self) -> tuple[int, int]:
        """Return ``(x, y)``."""
        return (self.x, self.y)

    def clone(self) -> Entity:
        """Return a structural copy of this entity."""
        return replace(self)

    def with_iota(self, value: float) -> Entity:
        """Return a copy carrying a new stimulus value."""
        return replace(self, iota=value)

    def moved_to(self, x: int, y: int) -> Entity:
        """Return a copy of this entity at ``(x, y)``."""
        return replace(self, x=x, y=y)
