"""Exceptions raised by the field descriptor core."""
from __future__ import annotations


class MorphogenError(Exception):
    """Base class for descriptor failures."""


class TruncatedStreamError(MorphogenError, EOFError):
    """A serialized descriptor ended before all fields were read."""


class MalformedStreamError(MorphogenError, ValueError):
    """A serialized descriptor holds values no descriptor can contain."""


class ConfigurationMismatchError(MorphogenError, ValueError):
    """Descriptors or streams built with different field constants met."""
