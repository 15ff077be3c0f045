"""Command-line interface for graticule.

Computes a graticule for a bounding box on an in-memory Web Mercator map
and writes its GeoJSON, a PNG preview or a style fragment, using the
Typer framework.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import mercantile
import typer

from . import config
from .exceptions import GraticuleError
from .export import write_layer_config
from .host import MercatorHost
from .layer import GraticuleLayer

app = typer.Typer(help="Latitude/longitude graticule overlays for slippy maps.")

BoundsOption = typer.Option(None, "--bounds", help="West south east north in degrees.")
TileOption = typer.Option(None, "--tile", help="Use the bounds of slippy tile z/x/y.")
IntervalOption = typer.Option(None, "--interval", help="Line spacing.")
UnitOption = typer.Option(None, "--unit", help="degree or arcminute.")
PrecisionOption = typer.Option(None, "--precision", help="degree, minute or second.")
GridOption = typer.Option(None, "--grid/--no-grid", help="Draw full grid lines.")
BearingOption = typer.Option(0.0, "--bearing", help="Map rotation in degrees.")
WidthOption = typer.Option(1024, "--width", help="Viewport width in pixels.")
HeightOption = typer.Option(768, "--height", help="Viewport height in pixels.")
EnvOption = typer.Option("DEFAULT", "--env", help="Settings environment.")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Debug logging.")


def _setup(env, verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    if env != "DEFAULT":
        config.change_env(env)


def _parse_tile(tile):
    try:
        z, x, y = (int(part) for part in tile.split("/"))
    except ValueError:
        raise typer.BadParameter(f"Expected z/x/y, got {tile!r}") from None
    return mercantile.Tile(x, y, z)


def _checked_build(*args, **kwargs):
    try:
        return build(*args, **kwargs)
    except (GraticuleError, ValueError) as err:
        raise typer.BadParameter(str(err)) from None


def build(bounds=None, tile=None, interval=None, unit=None, precision=None,
          grid=None, bearing=0.0, width=1024, height=768):
    """Create a host fitted to the area and a graticule layer attached to it."""
    if tile:
        tile = _parse_tile(tile)
        bbox = mercantile.bounds(tile)
        bounds = (bbox.west, bbox.south, bbox.east, bbox.north)
    layer = GraticuleLayer(
        bounds=bounds,
        interval=interval,
        interval_unit=unit,
        label_formatter=precision,
        show_grid=grid,
    )
    b = layer.options.bounds
    host = MercatorHost(width=width, height=height, bearing=bearing)
    host.fit_bounds((b.west, b.south, b.east, b.north))
    layer.add_to(host)
    return host, layer


@app.command()
def geojson(
    bounds: Optional[Tuple[float, float, float, float]] = BoundsOption,
    tile: Optional[str] = TileOption,
    interval: Optional[float] = IntervalOption,
    unit: Optional[str] = UnitOption,
    precision: Optional[str] = PrecisionOption,
    grid: Optional[bool] = GridOption,
    bearing: float = BearingOption,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file."),
    env: str = EnvOption,
    verbose: bool = VerboseOption,
):
    """Print the feature collections of the visible sub-layers."""
    _setup(env, verbose)
    _, layer = _checked_build(bounds, tile, interval, unit, precision, grid, bearing)
    text = json.dumps(layer.collections, indent=2, ensure_ascii=False)
    if output:
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Wrote {output}")
    else:
        typer.echo(text)


@app.command()
def preview(
    output: Path = typer.Option(..., "--output", "-o", help="Output PNG file."),
    bounds: Optional[Tuple[float, float, float, float]] = BoundsOption,
    tile: Optional[str] = TileOption,
    interval: Optional[float] = IntervalOption,
    unit: Optional[str] = UnitOption,
    precision: Optional[str] = PrecisionOption,
    grid: Optional[bool] = GridOption,
    bearing: float = BearingOption,
    width: int = WidthOption,
    height: int = HeightOption,
    env: str = EnvOption,
    verbose: bool = VerboseOption,
):
    """Render the graticule to a PNG image."""
    from .preview import render_preview

    _setup(env, verbose)
    host, _ = _checked_build(bounds, tile, interval, unit, precision, grid, bearing, width, height)
    render_preview(host, output)
    typer.echo(f"Wrote {output}")


@app.command()
def style(
    output: Path = typer.Option(Path("graticule_layers.json"), "--output", "-o",
                                help="Output style fragment."),
    bounds: Optional[Tuple[float, float, float, float]] = BoundsOption,
    tile: Optional[str] = TileOption,
    interval: Optional[float] = IntervalOption,
    unit: Optional[str] = UnitOption,
    precision: Optional[str] = PrecisionOption,
    grid: Optional[bool] = GridOption,
    env: str = EnvOption,
    verbose: bool = VerboseOption,
):
    """Write sources and layer descriptors as a style fragment."""
    _setup(env, verbose)
    _, layer = _checked_build(bounds, tile, interval, unit, precision, grid)
    path = write_layer_config(layer, output)
    typer.echo(f"Wrote {path}")


if __name__ == "__main__":
    app()
