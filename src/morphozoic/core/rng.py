"""Central RNG helpers.

``make_rng`` serves anything that only needs good random numbers (random
grids, tests). ``LegacyRandom`` reproduces the 48-bit linear congruential
generator of ``java.util.Random`` bit for bit; descriptor hashes depend on it.
"""
from __future__ import annotations

from numpy.random import Generator, PCG64DXSM

_MULTIPLIER = 0x5DEECE66D
_ADDEND = 0xB
_MASK = (1 << 48) - 1


def make_rng(seed: int) -> Generator:
    return Generator(PCG64DXSM(seed))


def to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


class LegacyRandom:
    """48-bit LCG with ``java.util.Random`` seeding and output."""

    def __init__(self, seed: int):
        self._seed = 0
        self.set_seed(seed)

    def set_seed(self, seed: int):
        # Negative seeds behave like sign-extended Java longs.
        self._seed = (seed ^ _MULTIPLIER) & _MASK

    def next_bits(self, bits: int) -> int:
        self._seed = (self._seed * _MULTIPLIER + _ADDEND) & _MASK
        return to_int32(self._seed >> (48 - bits))

    def next_int(self) -> int:
        return self.next_bits(32)
