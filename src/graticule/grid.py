"""Grid line computation.

Longitude and latitude lines are snapped to multiples of the interval
that fall inside the bounds. The bounds are treated as a flat numeric
range: no antimeridian handling is done, west is assumed to be smaller
than east.
"""
import logging
import math
from typing import List, NamedTuple

from .exceptions import UnsupportedUnitError

logger = logging.getLogger(__name__)

DEGREE = "degree"
ARCMINUTE = "arcminute"

_UNIT_ALIASES = {
    DEGREE: DEGREE,
    "d": DEGREE,
    ARCMINUTE: ARCMINUTE,
    "m": ARCMINUTE,
}

WORLD_BOUNDS = ((-180.0, -85.051129), (180.0, 85.051129))


class Bounds(NamedTuple):
    """Geographic bounding box in degrees."""

    west: float
    south: float
    east: float
    north: float

    @classmethod
    def convert(cls, value):
        """Build a Bounds from a Bounds, ``[[w, s], [e, n]]`` or ``[w, s, e, n]``.

        Raises
        ------
        ValueError
            If the value has the wrong shape or south is above north.
        """
        if isinstance(value, cls):
            bounds = value
        elif value is not None and len(value) == 2:
            (west, south), (east, north) = value
            bounds = cls(float(west), float(south), float(east), float(north))
        elif value is not None and len(value) == 4:
            bounds = cls(*(float(v) for v in value))
        else:
            raise ValueError(f"Cannot convert {value!r} to bounds")
        if bounds.south > bounds.north:
            raise ValueError(f"South {bounds.south} is north of {bounds.north}")
        return bounds

    def ring(self):
        """Closed ring around the bounds, counter-clockwise from south-west."""
        return [
            [self.west, self.south],
            [self.east, self.south],
            [self.east, self.north],
            [self.west, self.north],
            [self.west, self.south],
        ]


class GridLines(NamedTuple):
    lng_lines: List[list]
    lat_lines: List[list]


def normalize_unit(unit):
    """Return the canonical interval unit name.

    ``"d"`` and ``"m"`` are accepted as short forms of ``"degree"`` and
    ``"arcminute"``.

    Raises
    ------
    UnsupportedUnitError
        If the unit is not recognized.
    """
    try:
        return _UNIT_ALIASES[unit]
    except (KeyError, TypeError):
        raise UnsupportedUnitError(f"Unsupported interval unit: {unit!r}") from None


def _steps(low, high, interval):
    """Integer multiples of interval between low and high, inclusive."""
    return range(math.ceil(low / interval), math.floor(high / interval) + 1)


def compute_grid(bounds, interval, unit=DEGREE) -> GridLines:
    """Compute the longitude and latitude lines covering the bounds.

    Parameters
    ----------
    bounds : Bounds or bounds-like
        Area to cover, see :meth:`Bounds.convert`.
    interval : float
        Line spacing, in degrees or arc-minutes depending on ``unit``.
    unit : str, optional
        ``"degree"`` or ``"arcminute"``, by default ``"degree"``.

    Returns
    -------
    GridLines
        Longitude lines spanning south to north and latitude lines
        spanning west to east, each in ascending coordinate order.

    Raises
    ------
    UnsupportedUnitError
        If ``unit`` is not a recognized interval unit.
    ValueError
        If ``interval`` is not positive.
    """
    if not interval or interval <= 0:
        raise ValueError(f"Interval must be positive, got {interval!r}")
    unit = normalize_unit(unit)
    west, south, east, north = Bounds.convert(bounds)

    scale = 60 if unit == ARCMINUTE else 1
    lng_lines = []
    for k in _steps(west * scale, east * scale, interval):
        lng = k * interval / scale
        lng_lines.append([[lng, south], [lng, north]])
    lat_lines = []
    for k in _steps(south * scale, north * scale, interval):
        lat = k * interval / scale
        lat_lines.append([[west, lat], [east, lat]])

    logger.debug("Grid %s every %s %s: %d longitude, %d latitude lines",
                 (west, south, east, north), interval, unit,
                 len(lng_lines), len(lat_lines))
    return GridLines(lng_lines, lat_lines)
