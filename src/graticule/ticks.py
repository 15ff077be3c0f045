"""Rotation-aware tick and label anchor geometry.

Ticks are offset in screen space, not in degrees, so they keep a fixed
pixel length at every zoom. The offset vector is rotated by the map
bearing so ticks stay perpendicular to the grid when the map is rotated.
"""
import math
from typing import List, NamedTuple

import numpy as np


class LabelAnchor(NamedTuple):
    """Where and how to place the label of one grid line end."""

    position: list
    value: float
    is_longitude: bool
    rotate: float
    anchor: str


def rotate(vector, angle):
    """Rotate a 2D vector counter-clockwise by ``angle`` radians."""
    cos, sin = np.cos(angle), np.sin(angle)
    matrix = np.array([[cos, -sin], [sin, cos]])
    return matrix @ np.asarray(vector, dtype=float)


class TickProjector:
    """Compute tick segments and label anchors for a set of grid lines.

    Parameters
    ----------
    host : Host
        Renderer providing ``project``, ``unproject`` and ``get_bearing``.
    tick_length : float, optional
        Tick length in pixels, by default 5.
    """

    def __init__(self, host, tick_length: float = 5):
        self.host = host
        self.tick_length = tick_length or 5

    def offsets(self):
        """Rotated pixel offsets for longitude and latitude line ends.

        Returns
        -------
        tuple of numpy.ndarray
            ``(lng_offset, lat_offset)``: ``[0, L]`` and ``[L, 0]`` rotated
            by the current bearing.
        """
        bearing = math.radians(self.host.get_bearing())
        lng_offset = rotate([0.0, self.tick_length], bearing)
        lat_offset = rotate([self.tick_length, 0.0], bearing)
        return lng_offset, lat_offset

    def _line_ends(self, lng_lines, lat_lines):
        """Yield (endpoint, pixel offset, is_longitude, anchor) per line end.

        South and west ends use ``(-ox, oy)``, north and east ends
        ``(ox, -oy)``.
        """
        lng_offset, lat_offset = self.offsets()
        lng_x, lng_y = float(lng_offset[0]), float(lng_offset[1])
        lat_x, lat_y = float(lat_offset[0]), float(lat_offset[1])
        for south_end, north_end in lng_lines:
            yield south_end, (-lng_x, lng_y), True, "top"
            yield north_end, (lng_x, -lng_y), True, "bottom"
        for west_end, east_end in lat_lines:
            yield west_end, (-lat_x, lat_y), False, "bottom"
            yield east_end, (lat_x, -lat_y), False, "top"

    def offset_point(self, lnglat, offset):
        """Move a geographic point by a pixel offset on screen."""
        point = self.host.project(lnglat)
        moved = (point[0] + offset[0], point[1] + offset[1])
        lnglat2 = self.host.unproject(moved)
        return [lnglat2[0], lnglat2[1]]

    def ticks(self, lng_lines, lat_lines) -> List[list]:
        """Tick segments ``[endpoint, offset endpoint]`` for every line end."""
        return [[list(end), self.offset_point(end, offset)]
                for end, offset, _, _ in self._line_ends(lng_lines, lat_lines)]

    def anchors(self, lng_lines, lat_lines) -> List[LabelAnchor]:
        """Label anchors for every line end, in the same order as :meth:`ticks`."""
        anchors = []
        for end, offset, is_longitude, anchor in self._line_ends(lng_lines, lat_lines):
            anchors.append(LabelAnchor(
                position=self.offset_point(end, offset),
                value=end[0] if is_longitude else end[1],
                is_longitude=is_longitude,
                rotate=0 if is_longitude else -90,
                anchor=anchor,
            ))
        return anchors
