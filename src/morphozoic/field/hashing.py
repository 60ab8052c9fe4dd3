"""Descriptor hash compatible with descriptors persisted by older builds."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable
import numpy as np

from morphozoic.core.rng import LegacyRandom, to_int32

if TYPE_CHECKING:
    from .morphogen import Sphere

HASH_SEED = 65


def float_bits(value: float) -> int:
    """IEEE-754 single precision bit pattern as a signed 32-bit int."""
    return int(np.array(value, dtype=np.float32).view(np.int32))


def field_hash(spheres: Iterable["Sphere"]) -> int:
    """Fold every density into one 32-bit fingerprint.

    The generator advances once per density position; positive densities
    additionally reseed it with ``draw ^ bits(density)``. Traversal order is
    sphere, then sector (row-major), then type.
    """

    rng = LegacyRandom(HASH_SEED)
    for sphere in spheres:
        for sector in sphere.sectors:
            for density in sector.densities:
                h = rng.next_int()
                if density > 0.0:
                    rng.set_seed(to_int32(h ^ float_bits(density)))
    return rng.next_int()
