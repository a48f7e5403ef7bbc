"""SimulationEngine — drives one animat across a generated grid.

Owns the grid, its terrain generator, the animat and the master RNG.  Each
tick the animat senses and moves; when the run is over ``finish`` bakes the
animat's path into the terrain as a trail.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from neurogrid.animat.animat import Animat
from neurogrid.simulation.config import SimulationConfig
from neurogrid.world.grid import Grid
from neurogrid.world.terrain import MapGenerator

logger = logging.getLogger(__name__)


@dataclass
class SimulationEngine:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        generator: Terrain generator injected into the grid.
        grid: Entity and node layers.
        animat: The exploring agent.
        rng: Master seeded random generator.
        tick: Current tick count.
    """

    config: SimulationConfig
    generator: MapGenerator = field(init=False)
    grid: Grid = field(init=False)
    animat: Animat = field(init=False)
    rng: Generator = field(init=False)
    tick: int = 0

    def __post_init__(self) -> None:
        """Build generator, grid, animat and RNG from config."""
        cfg = self.config
        self.rng = np.random.default_rng(cfg.seed)
        self.generator = MapGenerator(
            extent=cfg.grid_extent,
            seed=cfg.seed,
            stone_density=cfg.stone_density,
            water_density=cfg.water_density,
            trap_density=cfg.trap_density,
            resource_density=cfg.resource_density,
        )
        self.grid = Grid(
            generator=self.generator,
            mode=cfg.map_mode,
            extent=cfg.grid_extent,
        )
        self.animat = Animat(
            x=cfg.start_x,
            y=cfg.start_y,
            grid=self.grid,
            exploration=cfg.exploration,
            resource_stimulus=cfg.resource_stimulus,
        )
        logger.info(
            "Engine ready: extent=%d mode=%d seed=%d",
            cfg.grid_extent,
            cfg.map_mode,
            cfg.seed,
        )

    @property
    def finished(self) -> bool:
        """Return True once the animat can no longer move."""
        return not self.animat.alive

    def step(self) -> bool:
        """Advance the simulation by one tick.

        Returns:
            True if the animat moved.
        """
        moved = self.animat.update(self.rng)
        self.tick += 1
        return moved

    def run(self, ticks: int) -> int:
        """Run for up to ``ticks`` ticks, stopping early if the animat is stuck.

        Args:
            ticks: Maximum number of ticks to advance.

        Returns:
            Number of ticks actually run.
        """
        ran = 0
        for _ in range(ticks):
            ran += 1
            if not self.step():
                logger.info("Animat stopped at tick %d", self.tick)
                break
        return ran

    def finish(self) -> Grid:
        """Replay the animat's history into a trail and return its grid."""
        return self.grid.replay_journey(self.animat)
