"""Shared fixtures for the neurogrid test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from neurogrid.simulation.config import SimulationConfig
from neurogrid.world.grid import Grid
from neurogrid.world.terrain import MapGenerator, PassThroughGenerator


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def grid() -> Grid:
    """A 21x21 grid whose generator leaves every placement untouched."""
    return Grid(generator=PassThroughGenerator(), mode=0, extent=20)


@pytest.fixture
def small_grid() -> Grid:
    """A 5x5 pass-through grid for fast tests."""
    return Grid(generator=PassThroughGenerator(), mode=0, extent=4)


@pytest.fixture
def meadow_grid() -> Grid:
    """A 21x21 grid generated in meadow mode."""
    return Grid(generator=MapGenerator(extent=20, seed=7), mode=1, extent=20)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()
