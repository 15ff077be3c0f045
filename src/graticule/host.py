"""Host renderer contract and an in-memory Web Mercator host.

The graticule layer never draws anything itself. It talks to a host map
renderer through the small capability set described by :class:`Host`:
forward/inverse projection, the current bearing, and keyed registries of
sources, layers and images.

:class:`MercatorHost` implements that contract without a browser. It
projects with pyproj into Web Mercator, uses 512 pixel world tiles at
zoom 0 like vector map renderers do, and rotates the screen by the
bearing. It backs the CLI, the PNG preview and the tests.
"""
import logging
import math
from typing import NamedTuple, Optional, Protocol

import mercantile
from pyproj import Transformer

logger = logging.getLogger(__name__)

WORLD_TILE_SIZE = 512
WEBMERCATOR_HALF_EXTENT = 20037508.342789244

_to_webmerc = Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)
_from_webmerc = Transformer.from_crs("EPSG:3857", "EPSG:4326", always_xy=True)


class ScreenPoint(NamedTuple):
    x: float
    y: float


class LngLat(NamedTuple):
    lng: float
    lat: float


class Host(Protocol):
    """Capabilities a map renderer must offer to carry a graticule layer.

    ``get_source`` returns ``None`` for unknown ids, otherwise an object
    with a ``set_data(data)`` method. ``get_layer`` returns ``None`` for
    unknown ids.
    """

    def project(self, lnglat) -> ScreenPoint: ...

    def unproject(self, point) -> LngLat: ...

    def get_bearing(self) -> float: ...

    def get_source(self, source_id): ...

    def add_source(self, source_id, source): ...

    def remove_source(self, source_id): ...

    def get_layer(self, layer_id): ...

    def add_layer(self, layer): ...

    def remove_layer(self, layer_id): ...

    def has_image(self, image_id) -> bool: ...

    def add_image(self, image_id, image): ...

    def update_image(self, image_id, image): ...


class GeoJSONSource:
    """A keyed GeoJSON data source whose data can be replaced in place."""

    def __init__(self, data):
        self.data = data

    def set_data(self, data):
        self.data = data
        return self


class MercatorHost:
    """In-memory map host with a Web Mercator view.

    Parameters
    ----------
    center : tuple of float, optional
        View centre as (lng, lat), by default (0, 0).
    zoom : float, optional
        Zoom level, by default 0.
    width : int, optional
        Viewport width in pixels, by default 1024.
    height : int, optional
        Viewport height in pixels, by default 768.
    bearing : float, optional
        Map rotation in degrees clockwise from north, by default 0.
    """

    def __init__(self, center=(0.0, 0.0), zoom: float = 0, width: int = 1024,
                 height: int = 768, bearing: float = 0.0):
        self.center = LngLat(*center)
        self.zoom = zoom
        self.width = width
        self.height = height
        self.bearing = bearing
        self.sources = {}
        self.layers = {}
        self.images = {}

    @classmethod
    def from_tile(cls, x: int, y: int, z: int, **kwargs):
        """Create a host centred on slippy map tile ``z/x/y``."""
        bbox = mercantile.bounds(x, y, z)
        center = ((bbox.west + bbox.east) / 2, (bbox.south + bbox.north) / 2)
        kwargs.setdefault("zoom", z)
        return cls(center=center, **kwargs)

    # Projection

    @property
    def world_size(self):
        return WORLD_TILE_SIZE * 2 ** self.zoom

    def _world_pixel(self, lng, lat):
        x, y = _to_webmerc.transform(lng, lat)
        scale = self.world_size / (2 * WEBMERCATOR_HALF_EXTENT)
        return ((x + WEBMERCATOR_HALF_EXTENT) * scale,
                (WEBMERCATOR_HALF_EXTENT - y) * scale)

    def _rotate(self, dx, dy, angle):
        cos, sin = math.cos(angle), math.sin(angle)
        return dx * cos - dy * sin, dx * sin + dy * cos

    def project(self, lnglat) -> ScreenPoint:
        """Geographic position to viewport pixels."""
        lng, lat = lnglat
        px, py = self._world_pixel(lng, lat)
        cx, cy = self._world_pixel(*self.center)
        dx, dy = self._rotate(px - cx, py - cy, -math.radians(self.bearing))
        return ScreenPoint(dx + self.width / 2, dy + self.height / 2)

    def unproject(self, point) -> LngLat:
        """Viewport pixels to geographic position."""
        x, y = point
        dx, dy = self._rotate(x - self.width / 2, y - self.height / 2,
                              math.radians(self.bearing))
        cx, cy = self._world_pixel(*self.center)
        scale = (2 * WEBMERCATOR_HALF_EXTENT) / self.world_size
        mx = (cx + dx) * scale - WEBMERCATOR_HALF_EXTENT
        my = WEBMERCATOR_HALF_EXTENT - (cy + dy) * scale
        lng, lat = _from_webmerc.transform(mx, my)
        return LngLat(lng, lat)

    def get_bearing(self) -> float:
        return self.bearing

    def set_bearing(self, bearing: float):
        self.bearing = bearing
        return self

    def jump_to(self, center=None, zoom: Optional[float] = None,
                bearing: Optional[float] = None):
        """Move the view. Arguments left as None keep their current value."""
        if center is not None:
            self.center = LngLat(*center)
        if zoom is not None:
            self.zoom = zoom
        if bearing is not None:
            self.bearing = bearing
        return self

    def fit_bounds(self, bounds, padding: int = 40):
        """Centre and zoom the view so ``(west, south, east, north)`` fits.

        The bearing is left unchanged and ignored when fitting.
        """
        west, south, east, north = bounds
        x1, y1 = _to_webmerc.transform(west, south)
        x2, y2 = _to_webmerc.transform(east, north)
        lng, lat = _from_webmerc.transform((x1 + x2) / 2, (y1 + y2) / 2)
        self.center = LngLat(lng, lat)
        zoom0 = WORLD_TILE_SIZE / (2 * WEBMERCATOR_HALF_EXTENT)
        span_x = max(abs(x2 - x1) * zoom0, 1e-9)
        span_y = max(abs(y2 - y1) * zoom0, 1e-9)
        room = min((self.width - 2 * padding) / span_x,
                   (self.height - 2 * padding) / span_y)
        self.zoom = min(max(math.log2(max(room, 1e-9)), 0), 22)
        return self

    # Sources

    def get_source(self, source_id):
        return self.sources.get(source_id)

    def add_source(self, source_id, source):
        if source_id in self.sources:
            raise ValueError(f"There is already a source with ID {source_id!r}")
        self.sources[source_id] = GeoJSONSource(source["data"])
        logger.debug("Added source %s", source_id)

    def remove_source(self, source_id):
        if source_id not in self.sources:
            raise KeyError(f"There is no source with ID {source_id!r}")
        users = [lid for lid, layer in self.layers.items()
                 if layer.get("source") == source_id]
        if users:
            raise ValueError(
                f"Source {source_id!r} cannot be removed while layer "
                f"{users[0]!r} is using it")
        del self.sources[source_id]
        logger.debug("Removed source %s", source_id)

    # Layers

    def get_layer(self, layer_id):
        return self.layers.get(layer_id)

    def add_layer(self, layer):
        layer_id = layer["id"]
        if layer_id in self.layers:
            raise ValueError(f"Layer with id {layer_id!r} already exists")
        if layer.get("source") not in self.sources:
            raise ValueError(f"Source {layer.get('source')!r} not found")
        self.layers[layer_id] = layer
        logger.debug("Added %s layer %s", layer.get("type"), layer_id)

    def remove_layer(self, layer_id):
        if layer_id not in self.layers:
            raise KeyError(f"There is no layer with ID {layer_id!r}")
        del self.layers[layer_id]
        logger.debug("Removed layer %s", layer_id)

    # Images

    def has_image(self, image_id) -> bool:
        return image_id in self.images

    def add_image(self, image_id, image):
        if image_id in self.images:
            raise ValueError(f"An image named {image_id!r} already exists")
        self.images[image_id] = image

    def update_image(self, image_id, image):
        if image_id not in self.images:
            raise KeyError(f"The image {image_id!r} does not exist")
        self.images[image_id] = image
