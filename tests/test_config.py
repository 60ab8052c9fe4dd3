from pathlib import Path

import pytest

pytest.importorskip("pydantic")
from pydantic import ValidationError

from morphozoic.config import ConfigSchema, FieldConfig, get_field_config, load_config, set_field_config

DEFAULTS = Path(__file__).resolve().parents[1] / "src" / "morphozoic" / "config" / "defaults.yaml"


def test_defaults_file_matches_schema_defaults():
    cfg = load_config(DEFAULTS)
    assert cfg == ConfigSchema()
    assert cfg.field.num_sectors == 9
    assert cfg.field.sector_size(2) == 9


def test_partial_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("field:\n  num_types: 6\n")
    cfg = load_config(path)
    assert cfg.field.num_types == 6
    assert cfg.field.num_spheres == 3


@pytest.mark.parametrize(
    "kwargs",
    [{"neighborhood_dimension": 4}, {"neighborhood_dimension": 0}, {"num_spheres": 0}, {"num_types": 0}],
)
def test_field_config_validation(kwargs):
    with pytest.raises(ValidationError):
        FieldConfig(**kwargs)


def test_field_config_is_frozen():
    cfg = FieldConfig()
    with pytest.raises(ValidationError):
        cfg.num_types = 9


def test_active_config_swap():
    custom = FieldConfig(num_types=7)
    previous = set_field_config(custom)
    try:
        assert get_field_config() is custom
    finally:
        set_field_config(previous)
    assert get_field_config() is previous
