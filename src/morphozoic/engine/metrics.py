"""Tabular views of descriptors."""
from __future__ import annotations
from pathlib import Path
import pandas as pd

from morphozoic.field import Morphogen


def density_table(morphogen: Morphogen) -> pd.DataFrame:
    records = []
    for level, sphere in enumerate(morphogen.spheres):
        for index, sector in enumerate(sphere.sectors):
            for cell_type, density in enumerate(sector.densities):
                records.append(
                    {
                        "sphere": level,
                        "sector": index,
                        "dx": sector.dx,
                        "dy": sector.dy,
                        "d": sector.d,
                        "type": cell_type,
                        "density": float(density),
                    }
                )
    return pd.DataFrame(records, columns=["sphere", "sector", "dx", "dy", "d", "type", "density"])


def save_density_table(morphogen: Morphogen, path: Path):
    df = density_table(morphogen)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return df
