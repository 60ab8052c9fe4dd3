import pytest

pytest.importorskip("pandas")
import pandas as pd

from morphozoic.engine.metrics import density_table, save_density_table
from morphozoic.field import build


def test_density_table_shape(single_cell_grid, small_config):
    m = build(single_cell_grid, 2, 2, small_config)
    df = density_table(m)
    assert list(df.columns) == ["sphere", "sector", "dx", "dy", "d", "type", "density"]
    assert len(df) == 9 * 2
    hot = df[df.density > 0]
    assert len(hot) == 1
    assert hot.iloc[0][["sector", "type", "dx", "dy"]].tolist() == [4, 1, 0, 0]


def test_save_density_table(tmp_path, single_cell_grid, small_config):
    m = build(single_cell_grid, 2, 2, small_config)
    path = tmp_path / "out" / "densities.csv"
    save_density_table(m, path)
    assert pd.read_csv(path).equals(density_table(m))
