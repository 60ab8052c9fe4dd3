"""Configuration utilities for Morphozoic."""
from .schema import ConfigSchema, FieldConfig, GridConfig, StoreConfig, load_config
from .active import get_field_config, set_field_config

__all__ = [
    "ConfigSchema",
    "FieldConfig",
    "GridConfig",
    "StoreConfig",
    "load_config",
    "get_field_config",
    "set_field_config",
]
