"""Grid collaborator: cells, orientations and toroidal lookup."""
from .grid import EMPTY, Cell, Grid, Orientation, wrap

__all__ = ["EMPTY", "Cell", "Grid", "Orientation", "wrap"]
