"""Grid — the configuration space shared by terrain and neurons.

The Grid owns two parallel layers of identical extent: the entity layer
(what terrain occupies each cell) and the node layer (the compute node that
mirrors that cell).  Both are NumPy object arrays indexed ``[x, y]`` over the
inclusive range ``[0, N]`` on each axis.

Cells materialise lazily: the first time an empty in-range cell is looked up
it is filled with baseline terrain, run through the active terrain generator.
Out-of-range coordinates are never read or written; queries against them
return None and writes are dropped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Protocol

import numpy as np

from neurogrid.world.entity import DEFAULT_KIND, Entity, TerrainKind
from neurogrid.world.errors import MissingNodeError
from neurogrid.world.node import MAX_RECEPTIVE_FIELD, ComputeNode

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from neurogrid.world.terrain import TerrainGenerator

logger = logging.getLogger(__name__)

DEFAULT_EXTENT = 20

# Row-major 3x3 Moore window, centre included.
OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)
)


class Agent(Protocol):
    """What ``Grid.replay_journey`` needs from an agent.

    Attributes:
        history: Visited entities; the last element is the most recent.
        grid: The agent's own view of the grid.
    """

    history: list[Entity]
    grid: Grid


class Grid:
    """Entity layer and node layer kept in lockstep.

    Args:
        generator: Terrain generator consulted on every placement.
        mode: Generation-mode identifier passed to ``generator``.
        extent: Largest valid coordinate ``N``; each axis holds ``N + 1``
            positions.
    """

    def __init__(
        self,
        generator: TerrainGenerator,
        mode: int,
        extent: int = DEFAULT_EXTENT,
    ) -> None:
        self.extent = extent
        self.generator = generator
        self.mode = mode
        shape = (extent + 1, extent + 1)
        self._entities: NDArray[np.object_] = np.full(shape, None, dtype=object)
        self._nodes: NDArray[np.object_] = np.full(shape, None, dtype=object)

    def __repr__(self) -> str:
        return f"Grid(extent={self.extent}, mode={self.mode}, occupied={len(self)})"

    def __len__(self) -> int:
        return sum(1 for _ in self.entities())

    def __contains__(self, position: object) -> bool:
        if not isinstance(position, tuple) or len(position) != 2:
            return False
        x, y = position
        return self.peek(x, y) is not None

    # -- Configuration -------------------------------------------------------

    def use_generator(self, generator: TerrainGenerator, mode: int) -> None:
        """Switch the terrain generator and mode used by later placements."""
        self.generator = generator
        self.mode = mode

    def load(self, entities: Iterable[Entity], mode: int) -> None:
        """Write a prepared map straight into both layers.

        The generator is bypassed and existing cells are overwritten; every
        loaded cell gets a fresh node.  Out-of-range entities are skipped.
        Afterwards ``mode`` becomes the active generation mode.

        Args:
            entities: Entities to store.
            mode: Generation mode for subsequent placements.
        """
        self.mode = mode
        for entity in entities:
            x, y = entity.position
            if not self.in_bounds(x, y):
                logger.debug("load: skipping out-of-range %s", entity)
                continue
            node = ComputeNode(x=x, y=y)
            node.bind(entity)
            self._entities[x, y] = entity
            self._nodes[x, y] = node

    # -- Placement and removal ----------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies within ``[0, N] x [0, N]``."""
        return 0 <= x <= self.extent and 0 <= y <= self.extent

    def _is_vacant(self, x: int, y: int) -> bool:
        if self._entities[x, y] is not None:
            return False
        node = self._nodes[x, y]
        return node is None or node.is_empty

    def place(self, entity: Entity) -> Entity | None:
        """Place an entity on an empty cell.

        The candidate is passed through the terrain generator for the active
        mode first; the generator may change its kind or even its coordinate,
        so bounds and vacancy are checked again at the final position.  An
        empty node left behind by ``remove`` is rebound rather than replaced.

        Args:
            entity: Candidate entity.

        Returns:
            The entity actually stored, or None if the placement was dropped
            (out of range or occupied).
        """
        if not self.in_bounds(entity.x, entity.y) or not self._is_vacant(
            entity.x,
            entity.y,
        ):
            logger.debug("place: dropped %s", entity)
            return None

        final = self.generator.transform(entity, self.mode)
        x, y = final.position
        if final.position != entity.position:
            logger.debug("place: generator moved %s to (%d, %d)", entity, x, y)
            if not self.in_bounds(x, y) or not self._is_vacant(x, y):
                logger.debug("place: relocated target unavailable for %s", final)
                return None

        node = self._nodes[x, y]
        if node is None:
            node = ComputeNode(x=x, y=y)
        node.bind(final)
        self._entities[x, y] = final
        self._nodes[x, y] = node
        return final

    def remove(self, entity: Entity) -> None:
        """Clear the cell at the entity's coordinate.

        The node stays in place but is unbound, so it reads as empty until
        something is placed there again.  Removing an empty or out-of-range
        cell does nothing.
        """
        x, y = entity.position
        if not self.in_bounds(x, y):
            return
        self._entities[x, y] = None
        node = self._nodes[x, y]
        if node is not None:
            node.unbind()

    def set_entity_at(self, entity: Entity) -> None:
        """Overwrite the cell at the entity's coordinate unconditionally.

        Skips the vacancy check and the terrain generator.

        Raises:
            MissingNodeError: If no node exists at that in-range coordinate.
        """
        x, y = entity.position
        if not self.in_bounds(x, y):
            return
        node = self._require_node(x, y)
        self._entities[x, y] = entity
        node.bind(entity)

    # -- Lookup ----------------------------------------------------------------

    def peek(self, x: int, y: int) -> Entity | None:
        """Return the entity at ``(x, y)`` without materialising anything."""
        if not self.in_bounds(x, y):
            return None
        return self._entities[x, y]

    def ensure_materialized(self, x: int, y: int) -> Entity | None:
        """Fill an empty in-range cell with baseline terrain.

        Returns:
            The entity now stored at ``(x, y)``, or None when out of range
            (or when the generator relocated the default entity elsewhere).
        """
        existing = self.peek(x, y)
        if existing is not None or not self.in_bounds(x, y):
            return existing
        self.place(Entity.of(DEFAULT_KIND, x, y))
        return self._entities[x, y]

    def lookup(self, x: int, y: int) -> Entity | None:
        """Return the entity at ``(x, y)``, materialising it if unseen."""
        return self.ensure_materialized(x, y)

    def entities(self) -> Iterator[Entity]:
        """Yield every stored entity in ``[x, y]`` order."""
        for entity in self._entities.flat:
            if entity is not None:
                yield entity

    def node_at(self, x: int, y: int) -> ComputeNode | None:
        """Return the node at ``(x, y)``, or None if there is none."""
        if not self.in_bounds(x, y):
            return None
        return self._nodes[x, y]

    def _require_node(self, x: int, y: int) -> ComputeNode:
        node = self._nodes[x, y]
        if node is None:
            raise MissingNodeError(x, y)
        return node

    # -- Neighbourhoods ------------------------------------------------------

    def neighborhood(
        self,
        x: int,
        y: int,
        *,
        materialize: bool = False,
    ) -> list[Entity | None]:
        """Return the 3x3 Moore window around ``(x, y)``.

        Slots are in row-major offset order from ``(-1, -1)`` to ``(1, 1)``,
        centre included; out-of-range offsets are skipped entirely, so a
        corner cell yields 4 slots.

        Args:
            x: Column index.
            y: Row index.
            materialize: If True, unseen cells in the window are generated
                as they are observed; otherwise empty cells read as None.
        """
        read = self.lookup if materialize else self.peek
        return [
            read(x + dx, y + dy)
            for dx, dy in OFFSETS
            if self.in_bounds(x + dx, y + dy)
        ]

    def build_receptive_field(self, node: ComputeNode) -> ComputeNode:
        """Rebuild ``node``'s receptive field from its eight surrounding cells.

        Offsets are visited in row-major order, skipping the centre and
        anything out of range.  Unseen cells are materialised so a node exists
        for each.  Collection stops as soon as eight nodes are held.
        """
        node.receptive_field.clear()
        for dx, dy in OFFSETS:
            if dx == 0 and dy == 0:
                continue
            nx, ny = node.x + dx, node.y + dy
            if self.in_bounds(nx, ny):
                self.lookup(nx, ny)
                neighbour = self._nodes[nx, ny]
                if neighbour is not None:
                    node.add_to_receptive_field(neighbour)
            if len(node.receptive_field) == MAX_RECEPTIVE_FIELD:
                break
        return node

    def receptive_field_at(self, x: int, y: int) -> ComputeNode:
        """Build and return the receptive field for the node at ``(x, y)``.

        Raises:
            MissingNodeError: If there is no node at ``(x, y)``.
        """
        if not self.in_bounds(x, y):
            raise MissingNodeError(x, y)
        return self.build_receptive_field(self._require_node(x, y))

    # -- Stimulus ------------------------------------------------------------

    def set_iota_for_neighbors_of_type(
        self,
        kind: TerrainKind,
        value: float,
        x: int,
        y: int,
    ) -> int:
        """Broadcast a stimulus to same-kind cells around ``(x, y)``.

        Every entity in the 3x3 window (centre included) whose kind is
        exactly ``kind`` is rewritten with ``iota = value``, and its node is
        rebound and given the same ``current_value``.  Other cells are left
        alone.

        Returns:
            Number of cells updated.
        """
        updated = 0
        for dx, dy in OFFSETS:
            nx, ny = x + dx, y + dy
            entity = self.peek(nx, ny)
            if entity is None or entity.kind is not kind:
                continue
            entity = entity.with_iota(value)
            node = self._require_node(nx, ny)
            self._entities[nx, ny] = entity
            node.bind(entity)
            node.set_iota(value)
            updated += 1
        return updated

    def set_node_value(self, x: int, y: int, value: float) -> None:
        """Set ``current_value`` on the node at ``(x, y)``.

        Raises:
            MissingNodeError: If there is no node at that in-range coordinate.
        """
        if self.in_bounds(x, y):
            self._require_node(x, y).current_value = value

    def set_node_bias(self, x: int, y: int, bias: float) -> None:
        """Set ``bias`` on the node at ``(x, y)``.

        Raises:
            MissingNodeError: If there is no node at that in-range coordinate.
        """
        if self.in_bounds(x, y):
            self._require_node(x, y).bias = bias

    def set_node_weight(self, x: int, y: int, weight: float) -> None:
        """Set ``weight`` on the node at ``(x, y)``.

        Raises:
            MissingNodeError: If there is no node at that in-range coordinate.
        """
        if self.in_bounds(x, y):
            self._require_node(x, y).weight = weight

    def activate(self, x: int, y: int) -> float | None:
        """Run the activation of the node at ``(x, y)``.

        Returns:
            The activation, or None when ``(x, y)`` is out of range.

        Raises:
            MissingNodeError: If there is no node at that in-range coordinate.
        """
        if not self.in_bounds(x, y):
            return None
        return self._require_node(x, y).activate()

    # -- Agent journeys ------------------------------------------------------

    def replay_journey(self, agent: Agent) -> Grid:
        """Bake an agent's visit history into its grid as a trail.

        Pops the agent's history until it is empty; each visited cell is
        cleared and a ``PATH`` marker placed there instead.

        Returns:
            The agent's grid, now carrying the trail.
        """
        grid = agent.grid
        trail = 0
        while agent.history:
            visited = agent.history.pop()
            grid.remove(visited)
            grid.place(Entity.of(TerrainKind.PATH, visited.x, visited.y))
            trail += 1
        logger.info("Replayed journey: %d trail cells", trail)
        return grid
