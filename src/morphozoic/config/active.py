"""Process-wide field configuration."""
from __future__ import annotations

import logging
from typing import Optional

from .schema import FieldConfig

logger = logging.getLogger(__name__)

_active = FieldConfig()


def get_field_config() -> FieldConfig:
    return _active


def set_field_config(config: FieldConfig) -> FieldConfig:
    """Install ``config`` as the default for builds and decodes.

    Call once at startup, before any descriptor is built or loaded. Returns
    the previously active configuration.
    """
    global _active
    previous = _active
    _active = config
    logger.debug("active field config set to %s", config)
    return previous


def resolve(config: Optional[FieldConfig]) -> FieldConfig:
    return _active if config is None else config
