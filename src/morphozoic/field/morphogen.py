"""Morphogenetic field descriptors and their construction.

A field is a stack of nested spheres of increasing size. Each sphere tiles an
``ND x ND`` lattice of square sectors centred on the anchor cell, and every
sector carries the density of each cell type inside it.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional
import numpy as np

from morphozoic.config.active import resolve
from morphozoic.config.schema import FieldConfig
from morphozoic.world.grid import EMPTY, Cell, Grid, wrap

from .compare import compare, equals
from .hashing import field_hash

logger = logging.getLogger(__name__)


def _frozen(values) -> np.ndarray:
    arr = np.array(values, dtype=np.float32)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Sector:
    """Type densities of one square block.

    Attributes
    ----------
    dx, dy:
        Offset of the block corner from the anchor cell.
    d:
        Side length of the block.
    densities:
        ``float32`` vector, one entry per cell type, each in ``[0, 1]``.
    """

    dx: int
    dy: int
    d: int
    densities: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "densities", _frozen(self.densities))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Sector):
            return NotImplemented
        return (self.dx, self.dy, self.d) == (other.dx, other.dy, other.d) and np.array_equal(
            self.densities, other.densities
        )

    __hash__ = None


@dataclass(frozen=True)
class Sphere:
    """One pyramid level: ``ND * ND`` sectors in row-major order."""

    sectors: tuple[Sector, ...]

    @property
    def densities(self) -> np.ndarray:
        return np.stack([s.densities for s in self.sectors])


@dataclass(frozen=True, eq=False)
class Morphogen:
    """Field descriptor for one anchor cell.

    ``source_cells[x][y]`` holds detached copies of the cells around the
    anchor, recentred so the anchor sits at ``(0, 0)``. They are kept for
    display and are not part of hashing or comparison.
    """

    source_cells: tuple[tuple[Cell, ...], ...]
    spheres: tuple[Sphere, ...]
    hash_code: int
    config: FieldConfig

    def sphere(self, level: int) -> Sphere:
        return self.spheres[level]

    def density_array(self) -> np.ndarray:
        """All densities as a ``(num_spheres, num_sectors, num_types)`` array."""
        return np.stack([s.densities for s in self.spheres])

    def compare(self, other: "Morphogen", *, strict: bool = False) -> float:
        return compare(self, other, strict=strict)

    def equals(self, other: "Morphogen", *, strict: bool = False) -> bool:
        return equals(self, other, strict=strict)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Morphogen):
            return NotImplemented
        if self.config != other.config:
            return False
        return equals(self, other)

    def __hash__(self) -> int:
        return self.hash_code


def copy_source_cells(grid: Grid, x: int, y: int, dimension: int) -> tuple[tuple[Cell, ...], ...]:
    o = dimension // 2
    return tuple(
        tuple(grid.cell(x + i - o, y + j - o).clone(x=i - o, y=j - o) for j in range(dimension))
        for i in range(dimension)
    )


def generate_sphere(grid: Grid, x: int, y: int, level: int, config: FieldConfig) -> Sphere:
    nd = config.neighborhood_dimension
    d = config.sector_size(level)
    d2 = np.float32(d * d)
    o = (d * nd) // 2
    x0, y0 = x - o, y - o
    sectors = []
    for row in range(nd):
        for col in range(nd):
            bx, by = x0 + col * d, y0 + row * d
            block = grid.block(bx, by, d)
            counts = np.bincount(block[block != EMPTY], minlength=config.num_types)
            if counts.size > config.num_types:
                raise ValueError(f"grid holds cell type {counts.size - 1} but num_types is {config.num_types}")
            densities = counts.astype(np.float32) / d2
            sectors.append(Sector(dx=bx - x, dy=by - y, d=d, densities=densities))
    return Sphere(sectors=tuple(sectors))


def build(grid: Grid, x: int, y: int, config: Optional[FieldConfig] = None) -> Morphogen:
    """Build the field descriptor anchored at ``(x, y)``.

    Any integer anchor is accepted; it is folded onto the torus first. Only
    the sampled blocks are checked against ``config.num_types``.
    """

    config = resolve(config)
    x, y = wrap(x, grid.width), wrap(y, grid.height)
    source_cells = copy_source_cells(grid, x, y, config.neighborhood_dimension)
    spheres = tuple(generate_sphere(grid, x, y, level, config) for level in range(config.num_spheres))
    hash_code = field_hash(spheres)
    logger.debug("built morphogen at (%d, %d) hash=%d", x, y, hash_code)
    return Morphogen(source_cells=source_cells, spheres=spheres, hash_code=hash_code, config=config)
