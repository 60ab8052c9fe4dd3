"""Fixed big-endian binary layout for field descriptors.

Layout, every field 4 bytes wide:

1. source cells, ``x`` outer and ``y`` inner: type (int32), orientation
   ordinal (int32);
2. per sphere, per sector: ``dx``, ``dy``, ``d`` (int32) followed by
   ``num_types`` densities (float32);
3. hash code (int32).
"""
from __future__ import annotations

import logging
from typing import BinaryIO, Optional
import numpy as np

from morphozoic.config.active import resolve
from morphozoic.config.schema import FieldConfig
from morphozoic.errors import ConfigurationMismatchError, MalformedStreamError, TruncatedStreamError
from morphozoic.world.grid import EMPTY, Cell, Orientation

from .morphogen import Morphogen, Sector, Sphere

logger = logging.getLogger(__name__)

_INT = np.dtype(">i4")


def _sector_dtype(config: FieldConfig) -> np.dtype:
    return np.dtype([("dx", ">i4"), ("dy", ">i4"), ("d", ">i4"), ("densities", ">f4", (config.num_types,))])


def encoded_size(config: Optional[FieldConfig] = None) -> int:
    config = resolve(config)
    cells = 2 * config.num_sectors * _INT.itemsize
    sectors = config.num_spheres * config.num_sectors * _sector_dtype(config).itemsize
    return cells + sectors + _INT.itemsize


def encode(morphogen: Morphogen) -> bytes:
    config = morphogen.config
    cells = np.array(
        [(cell.type, int(cell.orientation)) for column in morphogen.source_cells for cell in column],
        dtype=_INT,
    )
    sectors = np.zeros(config.num_spheres * config.num_sectors, dtype=_sector_dtype(config))
    flat = [sector for sphere in morphogen.spheres for sector in sphere.sectors]
    sectors["dx"] = [s.dx for s in flat]
    sectors["dy"] = [s.dy for s in flat]
    sectors["d"] = [s.d for s in flat]
    sectors["densities"] = np.stack([s.densities for s in flat])
    return cells.tobytes() + sectors.tobytes() + np.array(morphogen.hash_code, dtype=_INT).tobytes()


def _source_cells(raw: np.ndarray, config: FieldConfig) -> tuple[tuple[Cell, ...], ...]:
    nd = config.neighborhood_dimension
    o = nd // 2
    pairs = raw.astype(np.int32).reshape(nd, nd, 2)
    columns = []
    for x in range(nd):
        column = []
        for y in range(nd):
            cell_type, ordinal = (int(v) for v in pairs[x, y])
            if not EMPTY <= cell_type < config.num_types:
                raise MalformedStreamError(f"cell type {cell_type} outside [{EMPTY}, {config.num_types})")
            try:
                orientation = Orientation.from_ordinal(ordinal)
            except ValueError as exc:
                raise MalformedStreamError(f"unknown orientation ordinal {ordinal}") from exc
            column.append(Cell(type=cell_type, x=x - o, y=y - o, orientation=orientation))
        columns.append(tuple(column))
    return tuple(columns)


def _spheres(raw: np.ndarray, config: FieldConfig) -> tuple[Sphere, ...]:
    nd = config.neighborhood_dimension
    spheres = []
    records = raw.reshape(config.num_spheres, config.num_sectors)
    for level in range(config.num_spheres):
        expected = config.sector_size(level)
        o = (expected * nd) // 2
        sectors = []
        for index, rec in enumerate(records[level]):
            if int(rec["d"]) != expected:
                raise MalformedStreamError(
                    f"sphere {level} has sector size {int(rec['d'])}, expected {expected}; "
                    "was the stream written with another field configuration?"
                )
            row, col = divmod(index, nd)
            offset = (int(rec["dx"]), int(rec["dy"]))
            if offset != (-o + col * expected, -o + row * expected):
                raise MalformedStreamError(f"sphere {level} sector {index} has offset {offset}")
            densities = rec["densities"].astype(np.float32)
            # NaN fails both bounds
            if not np.all((densities >= 0.0) & (densities <= 1.0)):
                raise MalformedStreamError(f"sphere {level} sector {index} has densities outside [0, 1]")
            sectors.append(Sector(dx=offset[0], dy=offset[1], d=expected, densities=densities))
        spheres.append(Sphere(sectors=tuple(sectors)))
    return tuple(spheres)


def decode(data: bytes, config: Optional[FieldConfig] = None) -> Morphogen:
    """Rebuild a descriptor from exactly one encoded record."""

    config = resolve(config)
    size = encoded_size(config)
    if len(data) < size:
        raise TruncatedStreamError(f"descriptor needs {size} bytes, got {len(data)}")
    if len(data) > size:
        raise ConfigurationMismatchError(f"descriptor is {size} bytes under {config}, got {len(data)}")
    n_cells = 2 * config.num_sectors
    cells_raw = np.frombuffer(data, dtype=_INT, count=n_cells)
    offset = n_cells * _INT.itemsize
    sector_dtype = _sector_dtype(config)
    n_sectors = config.num_spheres * config.num_sectors
    sectors_raw = np.frombuffer(data, dtype=sector_dtype, count=n_sectors, offset=offset)
    offset += n_sectors * sector_dtype.itemsize
    hash_code = int(np.frombuffer(data, dtype=_INT, count=1, offset=offset)[0])
    morphogen = Morphogen(
        source_cells=_source_cells(cells_raw, config),
        spheres=_spheres(sectors_raw, config),
        hash_code=hash_code,
        config=config,
    )
    logger.debug("decoded morphogen hash=%d", hash_code)
    return morphogen


def _read_record(stream: BinaryIO, size: int) -> bytes:
    """Read up to ``size`` bytes, stopping early only at end of stream.

    Unbuffered streams (pipes, sockets) may return short reads mid-record.
    """
    data = bytearray()
    while len(data) < size:
        chunk = stream.read(size - len(data))
        if not chunk:
            break
        data += chunk
    return bytes(data)


def save(morphogen: Morphogen, stream: BinaryIO) -> None:
    stream.write(encode(morphogen))
    stream.flush()


def load(stream: BinaryIO, config: Optional[FieldConfig] = None) -> Morphogen:
    """Read the next descriptor from ``stream``.

    Several descriptors may be stored back to back; each call consumes one.
    """

    config = resolve(config)
    size = encoded_size(config)
    data = _read_record(stream, size)
    if len(data) < size:
        raise TruncatedStreamError(f"stream ended after {len(data)} of {size} descriptor bytes")
    return decode(data, config)


def load_all(stream: BinaryIO, config: Optional[FieldConfig] = None) -> list[Morphogen]:
    """Read descriptors until the stream is exhausted.

    A clean end between records stops the read; a partial trailing record
    raises :class:`TruncatedStreamError`.
    """

    config = resolve(config)
    size = encoded_size(config)
    morphogens = []
    while True:
        data = _read_record(stream, size)
        if not data:
            return morphogens
        if len(data) < size:
            raise TruncatedStreamError(f"stream ended after {len(data)} of {size} descriptor bytes")
        morphogens.append(decode(data, config))
