"""Latitude/longitude graticule overlays for map renderers.

A :class:`GraticuleLayer` computes grid lines for a bounding box and an
interval in degrees or arc-minutes, adds ticks and degree/minute/second
labels that stay perpendicular to the grid when the map rotates, draws a
border around the area, and keeps these four layers in sync with a host
map renderer.
"""
from . import config
from .exceptions import (
    GraticuleError,
    InvalidHostError,
    UnsupportedFormatError,
    UnsupportedUnitError,
)
from .grid import Bounds, GridLines, compute_grid
from .host import MercatorHost
from .labels import format_label
from .layer import GraticuleLayer, LayerIds
from .options import GraticuleOptions
from .raster import LabelRasterizer, draw_label
from .ticks import TickProjector

__all__ = [
    "Bounds",
    "GraticuleError",
    "GraticuleLayer",
    "GraticuleOptions",
    "GridLines",
    "InvalidHostError",
    "LabelRasterizer",
    "LayerIds",
    "MercatorHost",
    "TickProjector",
    "UnsupportedFormatError",
    "UnsupportedUnitError",
    "compute_grid",
    "config",
    "draw_label",
    "format_label",
]
