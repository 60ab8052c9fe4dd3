"""Toroidal grid of typed, oriented cells."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Optional
import numpy as np

EMPTY = -1


class Orientation(IntEnum):
    """Compass heading of a cell; the value is its serialized ordinal."""

    NORTH = 0
    NORTHEAST = 1
    EAST = 2
    SOUTHEAST = 3
    SOUTH = 4
    SOUTHWEST = 5
    WEST = 6
    NORTHWEST = 7

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Orientation":
        return cls(ordinal)


def wrap(index, size: int):
    """Fold an index (or array of indices) onto ``[0, size)``."""
    return index % size


@dataclass(frozen=True)
class Cell:
    """A cell value.

    ``grid`` points at the live grid the cell was read from, or is ``None``
    for detached copies and cells read back from a stream.
    """

    type: int
    x: int
    y: int
    orientation: Orientation = Orientation.NORTH
    grid: Optional["Grid"] = field(default=None, compare=False, repr=False)

    @property
    def is_empty(self) -> bool:
        return self.type == EMPTY

    def clone(self, **changes) -> "Cell":
        """Return a detached copy, optionally with ``x``/``y`` etc. replaced."""
        changes.setdefault("grid", None)
        return replace(self, **changes)


class Grid:
    """Read-only snapshot view over cell type and orientation arrays.

    Arrays are indexed ``[y, x]`` with shape ``(height, width)``; every lookup
    wraps both axes.
    """

    def __init__(self, types: np.ndarray, orientations: Optional[np.ndarray] = None):
        types = np.asarray(types, dtype=np.int32)
        if types.ndim != 2:
            raise ValueError("types must be a 2-D (H, W) array")
        if orientations is None:
            orientations = np.zeros_like(types)
        orientations = np.asarray(orientations, dtype=np.int32)
        if orientations.shape != types.shape:
            raise ValueError("orientations must match the shape of types")
        if types.size and types.min() < EMPTY:
            raise ValueError("cell types must be EMPTY or non-negative")
        if orientations.size and (orientations.min() < 0 or orientations.max() >= len(Orientation)):
            raise ValueError("orientation ordinals out of range")
        self.types = types
        self.orientations = orientations

    @classmethod
    def empty(cls, width: int, height: int) -> "Grid":
        return cls(np.full((height, width), EMPTY, dtype=np.int32))

    @classmethod
    def random(cls, width: int, height: int, num_types: int, rng: np.random.Generator, fill: float = 0.3) -> "Grid":
        types = rng.integers(0, num_types, size=(height, width), dtype=np.int32)
        types[rng.random((height, width)) >= fill] = EMPTY
        orientations = rng.integers(0, len(Orientation), size=(height, width), dtype=np.int32)
        return cls(types, orientations)

    @property
    def width(self) -> int:
        return int(self.types.shape[1])

    @property
    def height(self) -> int:
        return int(self.types.shape[0])

    def cell(self, x: int, y: int) -> Cell:
        x, y = wrap(x, self.width), wrap(y, self.height)
        return Cell(
            type=int(self.types[y, x]),
            x=x,
            y=y,
            orientation=Orientation.from_ordinal(int(self.orientations[y, x])),
            grid=self,
        )

    def block(self, x0: int, y0: int, size: int) -> np.ndarray:
        """Types of the ``size x size`` block with corner ``(x0, y0)``.

        Blocks larger than the grid revisit the same cells.
        """
        xs = wrap(np.arange(x0, x0 + size), self.width)
        ys = wrap(np.arange(y0, y0 + size), self.height)
        return self.types[np.ix_(ys, xs)]

    def save(self, path) -> None:
        np.savez(path, types=self.types, orientations=self.orientations)

    @classmethod
    def load(cls, path) -> "Grid":
        """Load an ``.npz`` written by :meth:`save` or a plain ``.npy`` of types."""
        if str(path).endswith(".npy"):
            return cls(np.load(path))
        with np.load(path) as data:
            if "types" in data:
                return cls(data["types"], data["orientations"] if "orientations" in data else None)
            return cls(data[data.files[0]])
