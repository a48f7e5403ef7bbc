"""Entry point for ``python -m neurogrid``.

Loads the default YAML config, builds a simulation engine and either opens a
Pygame window to watch the animat explore or, with ``--headless``, runs the
walk and prints the final map with the animat's trail baked in.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from neurogrid.simulation.config import SimulationConfig
from neurogrid.simulation.engine import SimulationEngine
from neurogrid.ui.pygame_client import PygameRenderer
from neurogrid.ui.text_client import render

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create engine, run it."""
    parser = argparse.ArgumentParser(
        prog="neurogrid",
        description="neurogrid - animat exploring a neuron-mirrored grid",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--mode",
        type=int,
        default=None,
        help="Override the map generation mode (1, 2 or 3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=200,
        help="Maximum number of ticks to run (default: 200)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Print the final map instead of opening a window",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=24,
        help="Pixel size per grid cell (default: 24)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=5.0,
        help="Simulation ticks per second (default: 5)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    if args.mode is not None:
        config.map_mode = args.mode
    if args.seed is not None:
        config.seed = args.seed
    engine = SimulationEngine(config=config)

    if args.headless:
        engine.run(args.ticks)
        grid = engine.finish()
        print(render(grid, animat=engine.animat.position))
        return

    renderer = PygameRenderer(
        engine=engine,
        cell_size=args.cell_size,
        ticks_per_second=args.speed,
    )
    renderer.run(max_ticks=args.ticks)


if __name__ == "__main__":
    main()
