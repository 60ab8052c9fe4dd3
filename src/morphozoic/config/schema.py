"""Pydantic config schema and loader."""
from pathlib import Path
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldConfig(BaseModel):
    """Layout constants shared by every descriptor in a process.

    Two descriptors can only be compared, and a stream can only be read back,
    when both sides use an equal ``FieldConfig``.
    """

    model_config = ConfigDict(frozen=True)

    num_spheres: int = 3
    neighborhood_dimension: int = 3
    num_types: int = 4

    @field_validator("num_spheres", "num_types")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("counts must be at least 1")
        return v

    @field_validator("neighborhood_dimension")
    @classmethod
    def validate_dimension(cls, v: int) -> int:
        if v < 1 or v % 2 == 0:
            raise ValueError("neighborhood_dimension must be a positive odd number")
        return v

    @property
    def num_sectors(self) -> int:
        return self.neighborhood_dimension * self.neighborhood_dimension

    def sector_size(self, level: int) -> int:
        return self.neighborhood_dimension**level


class GridConfig(BaseModel):
    width: int = 64
    height: int = 64
    fill: float = 0.3

    @field_validator("width", "height")
    @classmethod
    def validate_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("grid dimensions must be positive")
        return v

    @field_validator("fill")
    @classmethod
    def validate_unit_interval(cls, v: float) -> float:
        if not 0 <= v <= 1:
            raise ValueError("fill must be within [0, 1]")
        return v


class StoreConfig(BaseModel):
    path: Path = Path("morphogens.db")
    tolerance: float = 0.0

    @field_validator("tolerance")
    @classmethod
    def validate_tolerance(cls, v: float) -> float:
        if v < 0:
            raise ValueError("tolerance must be non-negative")
        return v


class ConfigSchema(BaseModel):
    seed: int = 0
    field: FieldConfig = Field(default_factory=FieldConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)


def load_config(path: Path) -> ConfigSchema:
    data = yaml.safe_load(Path(path).read_text()) or {}
    return ConfigSchema(**data)
