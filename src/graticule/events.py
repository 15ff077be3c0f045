"""Redraw a graticule layer when the host view changes.

Wire a :class:`ViewChangeHandler` to the host's move notifications. In
degree mode every notification redraws at once. In arc-minute mode,
where there are many more lines and labels, notifications are coalesced:
the first one schedules a redraw after ``delay`` seconds and the ones
arriving while it is pending are dropped.

Redraws run under the layer lock and a pending redraw is cancelled when
the layer is detached.
"""
import logging
import threading

from .grid import ARCMINUTE

logger = logging.getLogger(__name__)


class ViewChangeHandler:
    """Callable redrawing ``layer`` on host view changes.

    Parameters
    ----------
    layer : GraticuleLayer
        Layer to redraw.
    delay : float, optional
        Seconds to wait before an arc-minute redraw, by default 0.5.
    timer_factory : callable, optional
        ``threading.Timer`` compatible factory, by default ``threading.Timer``.
    """

    def __init__(self, layer, delay=0.5, timer_factory=threading.Timer):
        self.layer = layer
        self.delay = delay
        self.timer_factory = timer_factory
        self._pending = None
        self._lock = threading.Lock()
        layer.on_detach(self.cancel)

    @property
    def pending(self):
        return self._pending is not None

    def __call__(self, *args, **kwargs):
        if not self.layer.attached:
            return
        if self.layer.options.interval_unit != ARCMINUTE:
            self._redraw()
            return
        with self._lock:
            if self._pending is not None:
                return
            self._pending = self.timer_factory(self.delay, self._run)
            self._pending.daemon = True
            self._pending.start()
        logger.debug("Redraw scheduled in %ss", self.delay)

    def _run(self):
        with self._lock:
            self._pending = None
        self._redraw()

    def _redraw(self):
        with self.layer.lock:
            if self.layer.attached:
                self.layer.update()

    def cancel(self):
        """Drop a scheduled redraw, if any."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
