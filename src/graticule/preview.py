"""PNG preview of what a graticule layer put on a :class:`MercatorHost`.

Line layers are drawn with their stroke paint, symbol layers with the
rasterized label icons, in the order the layers were added.
"""
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.offsetbox import AnnotationBbox, OffsetImage

logger = logging.getLogger(__name__)

# Where the anchor point sits on the icon, as matplotlib box alignment
ICON_ALIGNMENT = {
    "top": (0.5, 1.0),
    "bottom": (0.5, 0.0),
    "left": (0.0, 0.5),
    "right": (1.0, 0.5),
    "center": (0.5, 0.5),
}


def _draw_lines(ax, host, layer, data):
    paint = layer.get("paint", {})
    width = paint.get("line-width", 1)
    kwargs = dict(
        color=paint.get("line-color", "#000000"),
        alpha=paint.get("line-opacity", 1),
        linewidth=width,
        solid_capstyle=layer.get("layout", {}).get("line-cap", "butt"),
    )
    dashes = paint.get("line-dasharray")
    for feature in data["features"]:
        points = np.array([host.project(c) for c in feature["geometry"]["coordinates"]])
        line, = ax.plot(points[:, 0], points[:, 1], **kwargs)
        if dashes:
            line.set_dashes([d * width for d in dashes])


def _draw_icons(ax, host, data):
    for feature in data["features"]:
        properties = feature["properties"]
        image = host.images.get(properties["icon"])
        if image is None or 0 in image.size:
            continue
        if properties.get("rotate"):
            image = image.rotate(-properties["rotate"], expand=True)
        x, y = host.project(feature["geometry"]["coordinates"])
        box = AnnotationBbox(
            OffsetImage(np.asarray(image)), (x, y),
            box_alignment=ICON_ALIGNMENT.get(properties.get("anchor"), (0.5, 0.5)),
            frameon=False, pad=0,
        )
        ax.add_artist(box)


def render_preview(host, path, dpi=100, background="white"):
    """Draw the host's layers into a PNG file.

    Parameters
    ----------
    host : MercatorHost
        Host holding the graticule sources, layers and images.
    path : str or pathlib.Path
        Output PNG file.
    dpi : int, optional
        Figure resolution, by default 100.
    background : str, optional
        Figure background colour, by default "white".
    """
    fig, ax = plt.subplots(figsize=(host.width / dpi, host.height / dpi), dpi=dpi)
    try:
        fig.patch.set_facecolor(background)
        ax.set_xlim(0, host.width)
        ax.set_ylim(host.height, 0)
        ax.axis('off')
        plt.subplots_adjust(left=0, right=1, top=1, bottom=0, wspace=0, hspace=0)
        for layer_id, layer in host.layers.items():
            data = host.get_source(layer["source"]).data
            if layer["type"] == "line":
                _draw_lines(ax, host, layer, data)
            elif layer["type"] == "symbol":
                _draw_icons(ax, host, data)
            logger.debug("Drew %s with %d features", layer_id, len(data["features"]))
        fig.savefig(path, format='png', dpi=dpi, facecolor=background)
    finally:
        plt.close(fig)
    return path
