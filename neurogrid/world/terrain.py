"""Terrain generation — decides what a newly placed entity becomes.

The grid hands every candidate entity to a ``TerrainGenerator`` together with
its active mode identifier before writing it.  Generators never touch the grid
themselves; the grid trusts the coordinate of whatever entity comes back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import numpy as np
from numpy.random import Generator

from neurogrid.world.entity import DEFAULT_KIND, Entity, TerrainKind

MEADOW = 1
SCATTER = 2
ARENA = 3
MODES = (MEADOW, SCATTER, ARENA)

_STREAM_ROW = 2


class TerrainGenerator(Protocol):
    """Contract for terrain generation strategies."""

    def transform(self, candidate: Entity, mode: int) -> Entity:
        """Return the entity that should actually occupy the candidate's cell."""
        ...


class PassThroughGenerator:
    """Generator that never reclassifies anything."""

    def transform(self, candidate: Entity, mode: int) -> Entity:
        return candidate


@dataclass
class MapGenerator:
    """Built-in maps selected by mode identifier.

    Only baseline terrain (``GRASS``) is reclassified; any other kind was
    chosen deliberately by the caller and is returned as is.

    - ``MEADOW`` (1): grass everywhere, with a stream of water along row 2.
    - ``SCATTER`` (2): grass randomly turns into stone, water or resources.
    - ``ARENA`` (3): a stone wall around the border, with traps and
      resources scattered inside.

    Unrecognised modes apply no transform.

    Attributes:
        extent: Largest valid coordinate ``N`` on each axis.
        seed: Seed for the generator's private RNG.
        stone_density: Probability of stone in ``SCATTER`` mode.
        water_density: Probability of water in ``SCATTER`` mode.
        trap_density: Probability of a trap inside the ``ARENA``.
        resource_density: Probability of a resource in ``SCATTER`` and
            ``ARENA`` modes.
    """

    extent: int = 20
    seed: int = 0
    stone_density: float = 0.12
    water_density: float = 0.08
    trap_density: float = 0.03
    resource_density: float = 0.05
    rng: Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Create the private RNG."""
        self.rng = np.random.default_rng(self.seed)

    def transform(self, candidate: Entity, mode: int) -> Entity:
        """Reclassify baseline terrain according to ``mode``.

        Args:
            candidate: Entity about to be placed.
            mode: Active generation-mode identifier.

        Returns:
            The entity to store (same coordinate as the candidate).
        """
        if candidate.kind is not DEFAULT_KIND:
            return candidate
        if mode == MEADOW:
            return self._meadow(candidate)
        if mode == SCATTER:
            return self._scatter(candidate)
        if mode == ARENA:
            return self._arena(candidate)
        return candidate

    def _meadow(self, candidate: Entity) -> Entity:
        if candidate.y == _STREAM_ROW:
            return Entity.of(TerrainKind.WATER, candidate.x, candidate.y)
        return candidate

    def _scatter(self, candidate: Entity) -> Entity:
        kind = self._pick(
            [
                (TerrainKind.STONE, self.stone_density),
                (TerrainKind.WATER, self.water_density),
                (TerrainKind.RESOURCE, self.resource_density),
            ],
        )
        if kind is None:
            return candidate
        return Entity.of(kind, candidate.x, candidate.y)

    def _arena(self, candidate: Entity) -> Entity:
        x, y = candidate.position
        if x in (0, self.extent) or y in (0, self.extent):
            return Entity.of(TerrainKind.STONE, x, y)
        kind = self._pick(
            [
                (TerrainKind.TRAP, self.trap_density),
                (TerrainKind.RESOURCE, self.resource_density),
            ],
        )
        if kind is None:
            return candidate
        return Entity.of(kind, x, y)

    def _pick(self, weighted: list[tuple[TerrainKind, float]]) -> TerrainKind | None:
        """Draw one kind from cumulative probabilities, or None for no change."""
        roll = float(self.rng.random())
        acc = 0.0
        for kind, p in weighted:
            acc += p
            if roll < acc:
                return kind
        return None
