import numpy as np
import pytest

from morphozoic.world import EMPTY, Grid, Orientation, wrap


def test_wrap_normalizes_negative_and_large_indices():
    assert wrap(-1, 5) == 4
    assert wrap(5, 5) == 0
    assert wrap(-11, 5) == 4
    assert list(wrap(np.arange(-2, 3), 3)) == [1, 2, 0, 1, 2]


def test_cell_lookup_wraps(single_cell_grid):
    cell = single_cell_grid.cell(7, -3)
    assert (cell.x, cell.y) == (2, 2)
    assert cell.type == 1
    assert cell.grid is single_cell_grid


def test_clone_is_detached(single_cell_grid):
    cell = single_cell_grid.cell(2, 2)
    copy = cell.clone(x=0, y=0)
    single_cell_grid.types[2, 2] = EMPTY
    assert copy.type == 1
    assert not copy.is_empty
    assert single_cell_grid.cell(2, 2).is_empty
    assert copy.grid is None
    assert (copy.x, copy.y) == (0, 0)


def test_block_larger_than_grid_revisits_cells():
    grid = Grid(np.arange(4, dtype=np.int32).reshape(2, 2))
    block = grid.block(-1, -1, 4)
    assert block.shape == (4, 4)
    assert block[0, 0] == grid.types[1, 1]
    assert np.array_equal(block[:2, :2], block[2:, 2:])


def test_orientation_reverse_lookup():
    for o in Orientation:
        assert Orientation.from_ordinal(int(o)) is o
    with pytest.raises(ValueError):
        Orientation.from_ordinal(len(Orientation))


def test_rejects_bad_arrays():
    with pytest.raises(ValueError):
        Grid(np.zeros(4, dtype=np.int32))
    with pytest.raises(ValueError):
        Grid(np.zeros((2, 2)), np.zeros((3, 3)))
    with pytest.raises(ValueError):
        Grid(np.full((2, 2), -2))
    with pytest.raises(ValueError):
        Grid(np.zeros((2, 2)), np.full((2, 2), 8))


def test_save_load_roundtrip(tmp_path):
    rng = np.random.default_rng(0)
    grid = Grid.random(6, 4, 3, rng, fill=0.5)
    path = tmp_path / "grid.npz"
    grid.save(path)
    loaded = Grid.load(path)
    assert loaded.width == 6 and loaded.height == 4
    assert np.array_equal(loaded.types, grid.types)
    assert np.array_equal(loaded.orientations, grid.orientations)


def test_random_grid_respects_types():
    grid = Grid.random(8, 8, 3, np.random.default_rng(1), fill=1.0)
    assert grid.types.min() >= 0
    assert grid.types.max() < 3
    empty = Grid.random(8, 8, 3, np.random.default_rng(1), fill=0.0)
    assert np.all(empty.types == EMPTY)
