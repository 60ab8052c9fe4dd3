import pytest

from morphozoic.config import FieldConfig
from morphozoic.engine.store import find_matches, load_morphogens, save_morphogens
from morphozoic.errors import ConfigurationMismatchError
from morphozoic.field import build


def test_store_roundtrip(tmp_path, single_cell_grid, small_config):
    path = tmp_path / "store" / "morphogens.db"
    centred = build(single_cell_grid, 2, 2, small_config)
    corner = build(single_cell_grid, 0, 0, small_config)
    save_morphogens(path, {"centred": centred, "corner": corner})
    loaded = load_morphogens(path, small_config)
    assert set(loaded) == {"centred", "corner"}
    assert loaded["centred"].hash_code == centred.hash_code
    assert loaded["corner"].spheres == corner.spheres


def test_latest_label_wins(tmp_path, single_cell_grid, small_config):
    path = tmp_path / "morphogens.db"
    save_morphogens(path, {"probe": build(single_cell_grid, 0, 0, small_config)})
    latest = build(single_cell_grid, 2, 2, small_config)
    save_morphogens(path, {"probe": latest})
    assert load_morphogens(path, small_config)["probe"].hash_code == latest.hash_code


def test_find_matches_orders_by_distance(tmp_path, single_cell_grid, small_config):
    path = tmp_path / "morphogens.db"
    save_morphogens(
        path,
        {
            "centred": build(single_cell_grid, 2, 2, small_config),
            "shifted": build(single_cell_grid, 3, 2, small_config),
            "corner": build(single_cell_grid, 0, 0, small_config),
        },
    )
    probe = build(single_cell_grid, 7, 7, small_config)
    assert find_matches(path, probe) == [("centred", 0.0)]
    labels = [label for label, _ in find_matches(path, probe, tolerance=2.0)]
    assert labels == ["centred", "corner", "shifted"]


def test_store_rejects_other_layout(tmp_path, single_cell_grid, small_config):
    path = tmp_path / "morphogens.db"
    save_morphogens(path, {"a": build(single_cell_grid, 2, 2, small_config)})
    other = FieldConfig(num_spheres=2, num_types=2)
    with pytest.raises(ConfigurationMismatchError):
        load_morphogens(path, other)
    with pytest.raises(ConfigurationMismatchError):
        save_morphogens(path, {"b": build(single_cell_grid, 2, 2, other)})


def test_missing_store(tmp_path, small_config):
    with pytest.raises(FileNotFoundError):
        load_morphogens(tmp_path / "absent.db", small_config)
