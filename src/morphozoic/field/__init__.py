"""Morphogenetic field descriptors: build, hash, compare and serialize."""
from .morphogen import Morphogen, Sector, Sphere, build
from .hashing import field_hash
from .compare import compare, equals
from .codec import decode, encode, encoded_size, load, load_all, save

__all__ = [
    "Morphogen",
    "Sector",
    "Sphere",
    "build",
    "field_hash",
    "compare",
    "equals",
    "encode",
    "decode",
    "encoded_size",
    "save",
    "load",
    "load_all",
]
