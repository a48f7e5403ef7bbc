"""Animat — an exploring agent that senses the grid through its neurons.

Each tick the animat rebuilds the receptive field of the node under it,
feeds every neighbour's stimulus into that neighbour's node, and steps toward
the most strongly activated cell it can enter.  Unvisited cells get a novelty
bonus and Gaussian noise breaks ties, so the walk keeps spreading out instead
of oscillating between two attractive cells.

Every cell the animat leaves is pushed onto ``history``; the grid can later
replay that stack into a permanent trail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from neurogrid.world.entity import Entity, TerrainKind

if TYPE_CHECKING:
    from numpy.random import Generator

    from neurogrid.world.grid import Grid
    from neurogrid.world.node import ComputeNode

logger = logging.getLogger(__name__)

# -- Constants ---------------------------------------------------------------

_NOVELTY_BONUS = 0.5
_IMPASSABLE = frozenset({TerrainKind.STONE})


@dataclass
class Animat:
    """A single exploring agent.

    Attributes:
        x: Current column.
        y: Current row.
        grid: The grid this animat walks on.
        history: Stack of entities it has left behind (top = last element).
        visited: Coordinates it has stood on.
        exploration: Standard deviation of the scoring noise.
        resource_stimulus: Iota broadcast to nearby resources when it finds one.
        alive: False once it has stepped on a trap.
        steps: Number of moves taken.
    """

    x: int
    y: int
    grid: Grid = field(repr=False)
    history: list[Entity] = field(default_factory=list, repr=False)
    visited: set[tuple[int, int]] = field(default_factory=set, repr=False)
    exploration: float = 0.1
    resource_stimulus: float = 0.9
    alive: bool = True
    steps: int = 0

    def __post_init__(self) -> None:
        """Materialise the starting cell and mark it visited."""
        self.grid.lookup(self.x, self.y)
        self.visited.add((self.x, self.y))

    @property
    def position(self) -> tuple[int, int]:
        """Return ``(x, y)``."""
        return (self.x, self.y)

    def sense(self) -> list[Entity | None]:
        """Observe the 3x3 window around the animat, generating unseen cells."""
        return self.grid.neighborhood(self.x, self.y, materialize=True)

    def update(self, rng: Generator) -> bool:
        """Take one step.

        Args:
            rng: Seeded random generator for the scoring noise.

        Returns:
            True if the animat moved, False if it is dead or boxed in.
        """
        if not self.alive:
            return False

        node = self.grid.node_at(self.x, self.y)
        if node is None:
            self.grid.lookup(self.x, self.y)
            node = self.grid.node_at(self.x, self.y)
        if node is None:
            return False

        self.grid.build_receptive_field(node)
        target = self._choose(node, rng)
        if target is None:
            logger.debug("Animat at %s has nowhere to go", self.position)
            return False

        leaving = self.grid.peek(self.x, self.y)
        if leaving is not None:
            self.history.append(leaving)
        self.x, self.y = target.x, target.y
        self.visited.add(self.position)
        self.steps += 1
        self._arrive(target)
        return True

    def _choose(self, node: ComputeNode, rng: Generator) -> Entity | None:
        """Pick the best enterable neighbour by activation, novelty and noise."""
        best: Entity | None = None
        best_score = float("-inf")
        for neighbour in node.receptive_field:
            entity = neighbour.entity
            if entity is None or entity.kind in _IMPASSABLE:
                continue
            neighbour.set_iota(entity.iota)
            score = neighbour.activate()
            if (entity.x, entity.y) not in self.visited:
                score += _NOVELTY_BONUS
            score += float(rng.normal(0.0, self.exploration))
            if score > best_score:
                best_score = score
                best = entity
        return best

    def _arrive(self, entity: Entity) -> None:
        """React to the terrain just stepped onto."""
        if entity.kind is TerrainKind.TRAP:
            self.alive = False
            logger.info("Animat fell into a trap at %s", self.position)
        elif entity.kind is TerrainKind.RESOURCE:
            self.grid.set_iota_for_neighbors_of_type(
                TerrainKind.RESOURCE,
                self.resource_stimulus,
                self.x,
                self.y,
            )
