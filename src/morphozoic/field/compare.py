"""Dissimilarity between field descriptors."""
from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np

from morphozoic.errors import ConfigurationMismatchError

if TYPE_CHECKING:
    from .morphogen import Morphogen


def compare(a: "Morphogen", b: "Morphogen", *, strict: bool = False) -> float:
    """L1 distance between the density vectors of ``a`` and ``b``.

    Matching hash codes short-circuit to ``0.0`` unless ``strict`` is set, so
    a hash collision reads as equality in the default mode.
    """

    if a.config != b.config:
        raise ConfigurationMismatchError(f"cannot compare descriptors built with {a.config} and {b.config}")
    if not strict and a.hash_code == b.hash_code:
        return 0.0
    delta = np.abs(a.density_array().astype(np.float64) - b.density_array().astype(np.float64))
    return float(delta.sum())


def equals(a: "Morphogen", b: "Morphogen", *, strict: bool = False) -> bool:
    return compare(a, b, strict=strict) == 0.0
