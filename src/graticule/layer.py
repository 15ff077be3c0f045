"""The graticule layer: keeps grid, tick, border and label layers on a host.

A :class:`GraticuleLayer` is detached until :meth:`GraticuleLayer.add_to`
binds it to a host. From then on every :meth:`GraticuleLayer.update`
recomputes the grid and reconciles each of the four sub-layers against
the host registries, keyed by ids generated once per attachment:

=========  =====================  ===============================
visible    source on host         action
=========  =====================  ===============================
yes        no                     create source (and layer)
yes        yes                    replace source data
no         source or layer        remove what is present
no         neither                nothing
=========  =====================  ===============================

Layers are added only when missing, so repeated updates never duplicate
anything on the host.

All state changes hold :attr:`GraticuleLayer.lock`, so a redraw started
from a timer thread never interleaves with a detach or another update.
"""
import logging
import threading
from typing import NamedTuple, Optional

from . import features
from .exceptions import InvalidHostError
from .grid import compute_grid
from .ids import make_icon_id, unique_id
from .labels import format_label
from .options import GraticuleOptions
from .raster import LabelRasterizer
from .styles import line_layer, symbol_layer
from .ticks import TickProjector

logger = logging.getLogger(__name__)

CREATE = "create"
UPDATE = "update"
DELETE = "delete"
NOOP = "noop"

SUB_LAYERS = ("grid", "tick", "border", "label")


class LayerIds(NamedTuple):
    """Source and layer ids of the four sub-layers on the host."""

    grid: str
    tick: str
    border: str
    label: str

    @classmethod
    def generate(cls):
        return cls(*(f"{name}_{unique_id()}" for name in SUB_LAYERS))


def plan_sync(visible, has_source, has_layer):
    """Decide how to bring one sub-layer in line with its visibility flag."""
    if visible:
        return UPDATE if has_source else CREATE
    if has_source or has_layer:
        return DELETE
    return NOOP


class GraticuleLayer:
    """Latitude/longitude grid overlay for a host map renderer.

    Parameters
    ----------
    options : GraticuleOptions, optional
        Layer options. When omitted they are read from the Dynaconf
        settings, see :meth:`GraticuleOptions.from_settings`.
    **kwargs
        Option values overriding ``options`` (or the settings).

    Examples
    --------
    >>> host = MercatorHost(center=(120.73, 31.26), zoom=9)
    >>> layer = GraticuleLayer(bounds=[[120.5, 31], [121, 31.4]],
    ...                        interval=10, interval_unit="arcminute",
    ...                        show_grid=True, tick_length=8)
    >>> layer.add_to(host).update()
    """

    def __init__(self, options: Optional[GraticuleOptions] = None, **kwargs):
        if options is None:
            options = GraticuleOptions.from_settings(**kwargs)
        elif kwargs:
            options = options.replace(**kwargs)
        self._options = options
        self._host = None
        self._layer_ids = None
        self._icon_ids = []
        self._detach_callbacks = []
        self.collections = {}
        self.lock = threading.RLock()

    @property
    def options(self) -> GraticuleOptions:
        return self._options

    @property
    def host(self):
        return self._host

    @property
    def attached(self) -> bool:
        return self._host is not None

    def get_layer_ids(self) -> Optional[LayerIds]:
        return self._layer_ids

    def on_detach(self, callback):
        """Call ``callback()`` every time the layer leaves its host."""
        self._detach_callbacks.append(callback)

    def add_to(self, host):
        """Attach to a host and draw the graticule.

        Raises
        ------
        InvalidHostError
            If ``host`` is None.
        """
        if host is None:
            raise InvalidHostError("Host map must not be None")
        with self.lock:
            if self._host is not None and self._host is not host:
                self.remove_from_map()
            self._host = host
            logger.debug("Attaching graticule to %r", host)
            return self.update()

    attach = add_to

    def set_bounds(self, bounds):
        """Change the covered area and redraw when attached."""
        return self.set_options(bounds=bounds)

    def set_interval(self, interval, unit=None):
        """Change the line spacing (and optionally its unit), redraw when attached."""
        changes = {"interval": interval}
        if unit is not None:
            changes["interval_unit"] = unit
        return self.set_options(**changes)

    def set_options(self, **changes):
        """Replace any options, e.g. ``show_grid=True``, and redraw when attached."""
        with self.lock:
            self._options = self._options.replace(**changes)
            if self.attached:
                self.update()
        return self

    def update(self):
        """Recompute the graticule and reconcile the four sub-layers.

        Raises
        ------
        InvalidHostError
            If the layer is not attached to a host.
        """
        with self.lock:
            host = self._host
            if host is None:
                raise InvalidHostError("Graticule layer is not attached to a host")
            if self._layer_ids is None:
                self._layer_ids = LayerIds.generate()
            ids = self._layer_ids
            opts = self._options
            lng_lines, lat_lines = compute_grid(opts.bounds, opts.interval, opts.interval_unit)

            self._sync(host, "grid", ids.grid, opts.show_grid,
                       lambda: features.grid_collection(lng_lines, lat_lines),
                       lambda: line_layer(ids.grid, opts.grid_style,
                                          opts.min_zoom, opts.max_zoom))
            self._sync(host, "tick", ids.tick, opts.show_tick,
                       lambda: self._tick_collection(host, lng_lines, lat_lines),
                       lambda: line_layer(ids.tick, opts.tick_style,
                                          opts.min_zoom, opts.max_zoom))
            self._sync(host, "border", ids.border, opts.show_border,
                       lambda: features.border_collection(opts.bounds),
                       lambda: line_layer(ids.border, opts.border_style,
                                          opts.min_zoom, opts.max_zoom))
            self._sync(host, "label", ids.label, opts.show_label,
                       lambda: self._label_collection(host, lng_lines, lat_lines),
                       lambda: symbol_layer(ids.label, opts.label_style,
                                            opts.min_zoom, opts.max_zoom))
        return self

    def _sync(self, host, name, layer_id, visible, build, describe):
        has_source = host.get_source(layer_id) is not None
        has_layer = host.get_layer(layer_id) is not None
        action = plan_sync(visible, has_source, has_layer)
        logger.debug("%s layer %s: %s", name, layer_id, action)

        if action in (CREATE, UPDATE):
            data = build()
            if action == UPDATE:
                host.get_source(layer_id).set_data(data)
            else:
                host.add_source(layer_id, {"type": "geojson", "data": data})
            if not has_layer:
                host.add_layer(describe())
            self.collections[name] = data
        else:
            if has_layer:
                host.remove_layer(layer_id)
            if has_source:
                host.remove_source(layer_id)
            self.collections.pop(name, None)
        return action

    def _tick_collection(self, host, lng_lines, lat_lines):
        if not lng_lines or not lat_lines:
            return features.empty_collection()
        projector = TickProjector(host, self._options.tick_length)
        return features.tick_collection(projector.ticks(lng_lines, lat_lines))

    def _label_collection(self, host, lng_lines, lat_lines):
        """Label points, each with its own icon.

        Icon ids are kept per label slot for the whole attachment, so a
        redraw replaces the existing host images instead of adding new
        ones.
        """
        if not lng_lines or not lat_lines:
            return features.empty_collection()
        opts = self._options
        projector = TickProjector(host, opts.tick_length)
        rasterizer = LabelRasterizer.from_style(host, opts.label_style, opts.pixel_ratio)
        labels = []
        for slot, anchor in enumerate(projector.anchors(lng_lines, lat_lines)):
            if slot == len(self._icon_ids):
                self._icon_ids.append(make_icon_id())
            text = format_label(anchor.value, anchor.is_longitude, opts.label_formatter)
            icon = rasterizer.rasterize(text, self._icon_ids[slot])
            labels.append(features.label_feature(
                anchor.position, text, anchor.rotate, anchor.anchor, icon.image_id))
        return features.feature_collection(labels)

    def remove_from_map(self):
        """Remove all sub-layers from the host and detach.

        Does nothing when not attached. Detach callbacks run afterwards,
        see :meth:`on_detach`.
        """
        with self.lock:
            host = self._host
            if host is None:
                return self
            for layer_id in self._layer_ids or ():
                if host.get_layer(layer_id) is not None:
                    host.remove_layer(layer_id)
                if host.get_source(layer_id) is not None:
                    host.remove_source(layer_id)
            logger.debug("Detached graticule layers %s", self._layer_ids)
            self._host = None
            self._layer_ids = None
            self._icon_ids = []
            self.collections = {}
            for callback in self._detach_callbacks:
                callback()
        return self

    detach = remove_from_map

    def to_dict(self):
        """All options as plain values, styles merged over their defaults."""
        return self._options.to_dict()
