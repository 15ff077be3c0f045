"""Tests for the graticule.events module."""

import math
import threading
from unittest.mock import MagicMock

import pytest

from graticule.events import ViewChangeHandler
from graticule.host import MercatorHost
from graticule.layer import GraticuleLayer


class FakeTimer:
    """Timer double that only runs when told to."""

    created = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.started = False
        self.cancelled = False
        self.daemon = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function()


@pytest.fixture(autouse=True)
def reset_timers():
    FakeTimer.created = []


def _layer(unit, attached=True):
    layer = MagicMock()
    layer.attached = attached
    layer.options.interval_unit = unit
    return layer


class TestViewChangeHandler:
    """Tests for the ViewChangeHandler class."""

    def test_degree_mode_updates_at_once(self):
        """Each notification redraws immediately in degree mode."""
        layer = _layer("degree")
        handler = ViewChangeHandler(layer, timer_factory=FakeTimer)

        handler()
        handler()

        assert layer.update.call_count == 2
        assert FakeTimer.created == []

    def test_arcminute_mode_is_delayed(self):
        """Arc-minute redraws wait for the timer."""
        layer = _layer("arcminute")
        handler = ViewChangeHandler(layer, delay=0.5, timer_factory=FakeTimer)

        handler()

        layer.update.assert_not_called()
        assert handler.pending
        timer, = FakeTimer.created
        assert timer.interval == 0.5
        assert timer.started
        assert timer.daemon

        timer.fire()
        layer.update.assert_called_once_with()
        assert not handler.pending

    def test_notifications_coalesce(self):
        """Notifications while a redraw is pending are dropped."""
        layer = _layer("arcminute")
        handler = ViewChangeHandler(layer, timer_factory=FakeTimer)

        for _ in range(5):
            handler("move")

        assert len(FakeTimer.created) == 1
        FakeTimer.created[0].fire()
        assert layer.update.call_count == 1

        handler("move")
        assert len(FakeTimer.created) == 2

    def test_detached_layer_ignored(self):
        """Nothing happens for a detached layer."""
        layer = _layer("degree", attached=False)
        ViewChangeHandler(layer, timer_factory=FakeTimer)()
        layer.update.assert_not_called()

    def test_detached_before_timer_fires(self):
        """A layer removed while waiting is not redrawn."""
        layer = _layer("arcminute")
        handler = ViewChangeHandler(layer, timer_factory=FakeTimer)
        handler()
        layer.attached = False

        FakeTimer.created[0].fire()
        layer.update.assert_not_called()

    def test_cancel(self):
        """cancel drops the pending redraw."""
        layer = _layer("arcminute")
        handler = ViewChangeHandler(layer, timer_factory=FakeTimer)
        handler()

        handler.cancel()

        assert FakeTimer.created[0].cancelled
        assert not handler.pending


class GatedHost(MercatorHost):
    """Host that blocks the first source lookup made off the main thread."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.armed = False
        self.entered = threading.Event()
        self.release = threading.Event()

    def get_source(self, source_id):
        if self.armed and threading.current_thread() is not threading.main_thread():
            self.armed = False
            self.entered.set()
            self.release.wait(5)
        return super().get_source(source_id)


def _arcminute_layer():
    return GraticuleLayer(bounds=[[120.5, 31], [121, 31.4]], interval=10,
                          interval_unit="arcminute", show_grid=True)


class TestWithLayer:
    """ViewChangeHandler driving a real GraticuleLayer."""

    def test_redraws_on_bearing_change(self, host, options):
        """The tick source is replaced and ticks turn with the map."""
        layer = GraticuleLayer(options).add_to(host)
        handler = ViewChangeHandler(layer, timer_factory=FakeTimer)
        tick_id = layer.get_layer_ids().tick
        before = host.get_source(tick_id).data

        host.set_bearing(45)
        handler()

        after = host.get_source(tick_id).data
        assert after is not before
        assert after is layer.collections["tick"]
        start, end = after["features"][0]["geometry"]["coordinates"]
        a, b = host.project(start), host.project(end)
        assert b.x - a.x == pytest.approx(5 / math.sqrt(2), abs=1e-4)
        assert b.y - a.y == pytest.approx(5 / math.sqrt(2), abs=1e-4)

    def test_detach_cancels_pending_redraw(self, host):
        """Detaching drops a scheduled redraw."""
        layer = _arcminute_layer().add_to(host)
        handler = ViewChangeHandler(layer, timer_factory=FakeTimer)
        handler()

        layer.detach()

        assert FakeTimer.created[0].cancelled
        assert not handler.pending

    def test_detach_waits_for_running_redraw(self):
        """A detach during a timer redraw leaves the host clean."""
        errors = []

        def timer_factory(interval, function):
            def run():
                try:
                    function()
                except Exception as err:
                    errors.append(err)
            return threading.Timer(interval, run)

        host = GatedHost(center=(120.75, 31.2), zoom=9)
        layer = _arcminute_layer().add_to(host)
        handler = ViewChangeHandler(layer, delay=0, timer_factory=timer_factory)

        host.armed = True
        handler()
        assert host.entered.wait(5)

        detacher = threading.Thread(target=layer.detach)
        detacher.start()
        host.release.set()
        detacher.join(5)

        assert not detacher.is_alive()
        assert errors == []
        assert host.layers == {}
        assert host.sources == {}
        assert not layer.attached
