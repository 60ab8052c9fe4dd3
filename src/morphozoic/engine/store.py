"""Descriptor library using SQLite + compressed blobs."""
from __future__ import annotations
import sqlite3
import zlib
import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from morphozoic.config.active import resolve
from morphozoic.config.schema import FieldConfig
from morphozoic.errors import ConfigurationMismatchError
from morphozoic.field import Morphogen, compare, decode, encode

logger = logging.getLogger(__name__)


def _connect(path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE IF NOT EXISTS meta(key TEXT PRIMARY KEY, value TEXT)")
    conn.execute(
        "CREATE TABLE IF NOT EXISTS morphogens(id INTEGER PRIMARY KEY, label TEXT, hash INTEGER, payload BLOB)"
    )
    return conn


def _check_layout(conn: sqlite3.Connection, config: FieldConfig, path: Path):
    row = conn.execute("SELECT value FROM meta WHERE key = 'field'").fetchone()
    if row is None:
        return False
    stored = FieldConfig(**json.loads(row[0]))
    if stored != config:
        logger.warning("store %s was written with %s, reader uses %s", path, stored, config)
        raise ConfigurationMismatchError(f"store {path} holds descriptors built with {stored}")
    return True


def save_morphogens(path: Path, items: Mapping[str, Morphogen]):
    """Append labelled descriptors; all must share the store's configuration."""
    if not items:
        return
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    configs = {m.config for m in items.values()}
    if len(configs) > 1:
        raise ConfigurationMismatchError("descriptors with different field configurations cannot share a store")
    config = configs.pop()
    conn = _connect(path)
    try:
        if not _check_layout(conn, config, path):
            conn.execute("INSERT INTO meta(key, value) VALUES ('field', ?)", (config.model_dump_json(),))
        conn.executemany(
            "INSERT INTO morphogens(label, hash, payload) VALUES (?, ?, ?)",
            [(label, m.hash_code, zlib.compress(encode(m))) for label, m in items.items()],
        )
        conn.commit()
    finally:
        conn.close()
    logger.debug("stored %d morphogens in %s", len(items), path)


def load_morphogens(path: Path, config: Optional[FieldConfig] = None) -> Dict[str, Morphogen]:
    """Return every label's most recent descriptor."""
    config = resolve(config)
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No descriptor store at {path}")
    conn = _connect(path)
    try:
        _check_layout(conn, config, path)
        rows = conn.execute("SELECT label, payload FROM morphogens ORDER BY id").fetchall()
    finally:
        conn.close()
    return {label: decode(zlib.decompress(payload), config) for label, payload in rows}


def find_matches(
    path: Path, morphogen: Morphogen, tolerance: float = 0.0, *, strict: bool = False
) -> List[Tuple[str, float]]:
    """Labels whose descriptor lies within ``tolerance`` of ``morphogen``, nearest first."""
    library = load_morphogens(path, morphogen.config)
    scored = [(label, compare(morphogen, other, strict=strict)) for label, other in library.items()]
    return sorted((item for item in scored if item[1] <= tolerance), key=lambda item: item[1])
