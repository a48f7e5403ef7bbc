"""Config — load grid and animat parameters from YAML files.

Grid extent, map mode, terrain densities and animat tuning live in YAML and
are parsed into a typed dataclass here.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        grid_extent: Largest valid coordinate ``N`` (``N + 1`` cells per axis).
        map_mode: Terrain generation mode (1 meadow, 2 scatter, 3 arena).
        start_x: Animat starting column.
        start_y: Animat starting row.
        stone_density: Stone probability for scatter maps.
        water_density: Water probability for scatter maps.
        trap_density: Trap probability inside arena maps.
        resource_density: Resource probability for scatter and arena maps.
        exploration: Noise applied to the animat's move scores.
        resource_stimulus: Iota broadcast to neighbouring resources when the
            animat reaches one.
    """

    seed: int = 42
    grid_extent: int = 20
    map_mode: int = 1
    start_x: int = 10
    start_y: int = 10

    # Terrain generation
    stone_density: float = 0.12
    water_density: float = 0.08
    trap_density: float = 0.03
    resource_density: float = 0.05

    # Animat behaviour
    exploration: float = 0.1
    resource_stimulus: float = 0.9

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Keys missing from the file keep their defaults; unknown keys are
        ignored.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_extent=data.get("grid_extent", cls.grid_extent),
            map_mode=data.get("map_mode", cls.map_mode),
            start_x=data.get("start_x", cls.start_x),
            start_y=data.get("start_y", cls.start_y),
            stone_density=data.get("stone_density", cls.stone_density),
            water_density=data.get("water_density", cls.water_density),
            trap_density=data.get("trap_density", cls.trap_density),
            resource_density=data.get("resource_density", cls.resource_density),
            exploration=data.get("exploration", cls.exploration),
            resource_stimulus=data.get(
                "resource_stimulus",
                cls.resource_stimulus,
            ),
        )
