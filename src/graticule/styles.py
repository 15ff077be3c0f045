"""Default styles and host layer descriptors.

Four style records drive the four sub-layers. Each is a flat dict merged
shallowly over its defaults: keys given by the user win, every other key
keeps its default.

Label style keys
    color, font_family, font_size, font_weight, rotate,
    rotation_alignment, allow_overlap
Stroke style keys
    line_color, line_cap, line_join, line_width, line_opacity,
    line_dasharray (optional, dashes are only drawn when non-empty)
"""

DEFAULT_LABEL_STYLE = {
    "color": "#000000",
    "font_family": "sans-serif",
    "font_size": 16,
    "font_weight": "normal",
    "rotate": 0,
    "rotation_alignment": "map",
    "allow_overlap": True,
}

DEFAULT_GRID_STYLE = {
    "line_color": "#B4C3D1",
    "line_cap": "butt",
    "line_join": "miter",
    "line_width": 1,
    "line_opacity": 1,
    "line_dasharray": [4, 4],
}

DEFAULT_TICK_STYLE = {
    "line_color": "#000000",
    "line_cap": "butt",
    "line_join": "miter",
    "line_width": 2,
    "line_opacity": 1,
}

DEFAULT_BORDER_STYLE = DEFAULT_TICK_STYLE

DEFAULT_STYLES = {
    "label_style": DEFAULT_LABEL_STYLE,
    "tick_style": DEFAULT_TICK_STYLE,
    "grid_style": DEFAULT_GRID_STYLE,
    "border_style": DEFAULT_BORDER_STYLE,
}


def merge_style(defaults, overrides=None):
    """Return a new style dict with ``overrides`` applied over ``defaults``."""
    merged = {key: list(value) if isinstance(value, list) else value
              for key, value in defaults.items()}
    merged.update(overrides or {})
    return merged


def line_layer(layer_id, style, min_zoom=0, max_zoom=22):
    """Descriptor of a line layer drawing source ``layer_id``."""
    paint = {
        "line-color": style.get("line_color"),
        "line-opacity": style.get("line_opacity"),
        "line-width": style.get("line_width"),
    }
    if style.get("line_dasharray"):
        paint["line-dasharray"] = list(style["line_dasharray"])
    layout = {
        "line-cap": style.get("line_cap"),
        "line-join": style.get("line_join"),
    }
    return _layer(layer_id, "line", paint, layout, min_zoom, max_zoom)


def symbol_layer(layer_id, style, min_zoom=0, max_zoom=22):
    """Descriptor of an icon layer showing rasterized labels.

    Icon, anchor and rotation are read from each feature's properties.
    """
    layout = {
        "icon-image": ["get", "icon"],
        "icon-size": 1,
        "icon-anchor": ["get", "anchor"],
        "icon-rotate": ["get", "rotate"],
        "icon-allow-overlap": style.get("allow_overlap"),
        "icon-rotation-alignment": style.get("rotation_alignment"),
    }
    return _layer(layer_id, "symbol", {}, layout, min_zoom, max_zoom)


def _layer(layer_id, layer_type, paint, layout, min_zoom, max_zoom):
    return {
        "id": layer_id,
        "type": layer_type,
        "source": layer_id,
        "minzoom": min_zoom,
        "maxzoom": max_zoom,
        "paint": paint,
        "layout": layout,
    }
