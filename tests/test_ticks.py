"""Tests for the graticule.ticks module."""

import math

import numpy as np
import pytest

from graticule.host import MercatorHost
from graticule.ticks import TickProjector, rotate

from conftest import FlatHost

LNG_LINES = [[[120, 30], [120, 40]]]
LAT_LINES = [[[120, 30], [130, 30]]]


def _cross(a, b):
    return a[0] * b[1] - a[1] * b[0]


class TestRotate:
    """Tests for the rotate function."""

    def test_quarter_turn(self):
        """[1, 0] turned by 90 degrees should become [0, 1]."""
        assert rotate([1, 0], math.pi / 2) == pytest.approx([0, 1], abs=1e-12)

    def test_keeps_length(self):
        """Rotation should not change the vector length."""
        vector = rotate([3, 4], 1.234)
        assert np.hypot(*vector) == pytest.approx(5)


class TestTickProjectorFlat:
    """TickProjector on a flat 100 px per degree host."""

    def test_offsets_without_bearing(self, flat_host):
        """At bearing 0 the offsets are [0, L] and [L, 0]."""
        lng_offset, lat_offset = TickProjector(flat_host, 5).offsets()
        assert lng_offset == pytest.approx([0, 5])
        assert lat_offset == pytest.approx([5, 0])

    def test_ticks_point_outward(self, flat_host):
        """South/north/west/east ends should get ticks pointing away from the grid."""
        ticks = TickProjector(flat_host, 5).ticks(LNG_LINES, LAT_LINES)

        south, north, west, east = ticks
        assert south[0] == [120, 30]
        assert south[1] == pytest.approx([120, 29.95])
        assert north[0] == [120, 40]
        assert north[1] == pytest.approx([120, 40.05])
        assert west[1] == pytest.approx([119.95, 30])
        assert east[1] == pytest.approx([130.05, 30])

    def test_ticks_follow_bearing(self):
        """At bearing 90 the offsets turn a quarter."""
        ticks = TickProjector(FlatHost(bearing=90), 5).ticks(LNG_LINES, LAT_LINES)

        south, north, west, east = ticks
        assert south[1] == pytest.approx([120.05, 30])
        assert north[1] == pytest.approx([119.95, 40])
        assert west[1] == pytest.approx([120, 29.95])
        assert east[1] == pytest.approx([130, 30.05])

    def test_zero_length_falls_back_to_default(self, flat_host):
        """A missing tick length should mean 5 pixels."""
        assert TickProjector(flat_host, 0).tick_length == 5
        assert TickProjector(flat_host, None).tick_length == 5

    def test_anchors_order_and_properties(self, flat_host):
        """Anchors come in tick order with label values, rotation and side."""
        anchors = TickProjector(flat_host, 8).anchors(LNG_LINES, LAT_LINES)

        assert [a.anchor for a in anchors] == ["top", "bottom", "bottom", "top"]
        assert [a.is_longitude for a in anchors] == [True, True, False, False]
        assert [a.rotate for a in anchors] == [0, 0, -90, -90]
        assert [a.value for a in anchors] == [120, 120, 30, 30]
        assert anchors[0].position == pytest.approx([120, 29.92])

    def test_anchor_positions_match_tick_ends(self, flat_host):
        """Label anchors sit at the outer end of the ticks."""
        projector = TickProjector(flat_host, 5)
        ticks = projector.ticks(LNG_LINES, LAT_LINES)
        anchors = projector.anchors(LNG_LINES, LAT_LINES)
        for tick, anchor in zip(ticks, anchors):
            assert anchor.position == pytest.approx(tick[1])

    def test_no_lines_no_ticks(self, flat_host):
        """Empty line lists should give empty results."""
        projector = TickProjector(flat_host, 5)
        assert projector.ticks([], []) == []
        assert projector.anchors([], []) == []


class TestTickProjectorMercator:
    """TickProjector on a rotated Web Mercator host."""

    @pytest.mark.parametrize("bearing", [0, 30, 90, 135, -45])
    def test_ticks_keep_pixel_length(self, bearing):
        """Ticks should be tick_length pixels long whatever the bearing."""
        host = MercatorHost(center=(125, 35), zoom=5, bearing=bearing)
        for start, end in TickProjector(host, 8).ticks(LNG_LINES, LAT_LINES):
            a, b = host.project(start), host.project(end)
            assert math.hypot(b.x - a.x, b.y - a.y) == pytest.approx(8, rel=1e-6)

    @pytest.mark.parametrize("bearing", [0, 30, 90, 200])
    def test_ticks_stay_aligned_with_lines(self, bearing):
        """On screen, ticks extend their grid line outward at any bearing."""
        host = MercatorHost(center=(125, 35), zoom=5, bearing=bearing)
        lines = LNG_LINES + LAT_LINES
        ends = [(line[0], line[1]) for line in lines]
        ticks = TickProjector(host, 8).ticks(LNG_LINES, LAT_LINES)
        # ticks come as (first end, second end) per line
        for (first, second), (tick_a, tick_b) in zip(ends, zip(ticks[::2], ticks[1::2])):
            p1, p2 = np.array(host.project(first)), np.array(host.project(second))
            line_dir = (p2 - p1) / np.linalg.norm(p2 - p1)
            out_a = np.array(host.project(tick_a[1])) - p1
            out_b = np.array(host.project(tick_b[1])) - p2
            assert _cross(line_dir, out_a) == pytest.approx(0, abs=1e-5)
            assert _cross(line_dir, out_b) == pytest.approx(0, abs=1e-5)
            assert np.dot(line_dir, out_a) < 0
            assert np.dot(line_dir, out_b) > 0
