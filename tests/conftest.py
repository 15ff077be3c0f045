"""Shared pytest fixtures for graticule tests."""

import tempfile
from pathlib import Path

import pytest

from graticule.host import LngLat, MercatorHost, ScreenPoint
from graticule.options import GraticuleOptions


class FlatHost:
    """Host double with a plate carrée projection of 100 pixels per degree.

    Screen y grows southwards, as on a real map.
    """

    def __init__(self, bearing=0.0):
        self.bearing = bearing

    def project(self, lnglat):
        lng, lat = lnglat
        return ScreenPoint(lng * 100.0, -lat * 100.0)

    def unproject(self, point):
        x, y = point
        return LngLat(x / 100.0, -y / 100.0)

    def get_bearing(self):
        return self.bearing


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def flat_host():
    return FlatHost()


@pytest.fixture
def host():
    """A Web Mercator host looking at eastern China."""
    return MercatorHost(center=(125, 35), zoom=4, width=800, height=600)


@pytest.fixture
def options():
    """Options covering [[120, 30], [130, 40]] every 5 degrees, grid shown."""
    return GraticuleOptions(
        bounds=[[120, 30], [130, 40]],
        interval=5,
        interval_unit="degree",
        show_grid=True,
    )
