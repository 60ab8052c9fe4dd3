"""Typer CLI for Morphozoic field descriptors."""
from __future__ import annotations
import logging
import typer
from pathlib import Path
from rich.console import Console
from rich.table import Table

from morphozoic.config import ConfigSchema, load_config, set_field_config
from morphozoic.core.rng import make_rng
from morphozoic.engine.metrics import save_density_table
from morphozoic.engine.store import find_matches, save_morphogens
from morphozoic.field import Morphogen, build, compare, decode, encode
from morphozoic.world import Grid

app = typer.Typer(help="Morphogenetic field descriptor CLI")
console = Console()


def _setup(config: Path | None, verbose: bool = False) -> ConfigSchema:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    cfg = load_config(config) if config is not None else ConfigSchema()
    set_field_config(cfg.field)
    return cfg


def _read(path: Path) -> Morphogen:
    return decode(path.read_bytes())


def _render(morphogen: Morphogen):
    nd = morphogen.config.neighborhood_dimension
    cells = Table(title="Source cells", show_header=False)
    for _ in range(nd):
        cells.add_column(justify="center")
    for y in reversed(range(nd)):
        row = [morphogen.source_cells[x][y] for x in range(nd)]
        cells.add_row(*("x" if cell.is_empty else str(cell.type) for cell in row))
    console.print(cells)
    for level, sphere in enumerate(morphogen.spheres):
        table = Table(title=f"Sphere {level}")
        for col in ("sector", "dx", "dy", "d", "densities"):
            table.add_column(col)
        for index, sector in enumerate(sphere.sectors):
            densities = " ".join(f"{v:.4f}" for v in sector.densities)
            table.add_row(str(index), str(sector.dx), str(sector.dy), str(sector.d), densities)
        console.print(table)
    console.print(f"Hash code={morphogen.hash_code}")


@app.command("random-grid")
def random_grid(
    out: Path = typer.Argument(..., help="Output .npz grid"),
    width: int = typer.Option(None, help="Override grid width"),
    height: int = typer.Option(None, help="Override grid height"),
    seed: int = typer.Option(None, help="Override seed"),
    fill: float = typer.Option(None, help="Fraction of non-empty cells"),
    config: Path = typer.Option(None, help="YAML config path"),
):
    cfg = _setup(config)
    grid = Grid.random(
        width if width is not None else cfg.grid.width,
        height if height is not None else cfg.grid.height,
        cfg.field.num_types,
        make_rng(seed if seed is not None else cfg.seed),
        fill=fill if fill is not None else cfg.grid.fill,
    )
    grid.save(out)
    console.print(f"Wrote {grid.width}x{grid.height} grid to {out}")


@app.command("build")
def build_cmd(
    grid_path: Path = typer.Argument(..., help="Grid .npz/.npy file"),
    x: int = typer.Option(..., help="Anchor x (any integer, wrapped onto the grid)"),
    y: int = typer.Option(..., help="Anchor y (any integer, wrapped onto the grid)"),
    out: Path = typer.Option(None, help="Write the encoded descriptor here"),
    store: Path = typer.Option(None, help="Also add the descriptor to this store"),
    save: bool = typer.Option(False, help="Add the descriptor to the configured store.path"),
    label: str = typer.Option(None, help="Store label (defaults to x,y)"),
    config: Path = typer.Option(None, help="YAML config path"),
    verbose: bool = typer.Option(False, help="Debug logging"),
):
    cfg = _setup(config, verbose)
    morphogen = build(Grid.load(grid_path), x, y)
    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(encode(morphogen))
    if save and store is None:
        store = cfg.store.path
    if store is not None:
        save_morphogens(store, {label or f"{x},{y}": morphogen})
    console.print(f"Hash code={morphogen.hash_code}")


@app.command()
def show(
    descriptor: Path = typer.Argument(..., help="Encoded descriptor"),
    csv: Path = typer.Option(None, help="Also write densities as CSV"),
    config: Path = typer.Option(None, help="YAML config path"),
):
    _setup(config)
    morphogen = _read(descriptor)
    _render(morphogen)
    if csv is not None:
        save_density_table(morphogen, csv)


@app.command("compare")
def compare_cmd(
    first: Path = typer.Argument(..., help="Encoded descriptor"),
    second: Path = typer.Argument(..., help="Encoded descriptor"),
    strict: bool = typer.Option(False, help="Skip the hash shortcut"),
    config: Path = typer.Option(None, help="YAML config path"),
):
    _setup(config)
    distance = compare(_read(first), _read(second), strict=strict)
    console.print({"distance": distance, "equal": distance == 0.0})


@app.command()
def match(
    descriptor: Path = typer.Argument(..., help="Encoded descriptor"),
    store: Path = typer.Option(None, help="Descriptor store (defaults to store.path)"),
    tolerance: float = typer.Option(None, help="Maximum distance"),
    strict: bool = typer.Option(False, help="Skip the hash shortcut"),
    config: Path = typer.Option(None, help="YAML config path"),
):
    cfg = _setup(config)
    store = store if store is not None else cfg.store.path
    matches = find_matches(store, _read(descriptor), tolerance if tolerance is not None else cfg.store.tolerance, strict=strict)
    table = Table(title=f"Matches in {store}")
    table.add_column("label")
    table.add_column("distance")
    for label, distance in matches:
        table.add_row(label, f"{distance:.6f}")
    console.print(table)


if __name__ == "__main__":
    app()
