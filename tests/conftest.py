"""Test configuration for local imports without installing the package."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure():
    """Ensure the src/ directory is importable for tests."""
    root = Path(__file__).resolve().parents[1] / "src"
    sys.path.insert(0, str(root))


@pytest.fixture
def single_cell_grid():
    """5x5 grid, empty except a type-1 cell at (2, 2)."""
    from morphozoic.world import Grid

    grid = Grid.empty(5, 5)
    grid.types[2, 2] = 1
    return grid


@pytest.fixture
def small_config():
    from morphozoic.config import FieldConfig

    return FieldConfig(num_spheres=1, neighborhood_dimension=3, num_types=2)
