"""GeoJSON feature collections for the graticule sub-layers."""


def empty_collection():
    return {"type": "FeatureCollection", "features": []}


def feature_collection(features):
    return {"type": "FeatureCollection", "features": list(features)}


def line_feature(coordinates):
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {"type": "LineString", "coordinates": coordinates},
    }


def point_feature(coordinates, properties):
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Point", "coordinates": coordinates},
    }


def grid_collection(lng_lines, lat_lines):
    """Longitude lines followed by latitude lines.

    Empty when either axis has no line.
    """
    if not lng_lines or not lat_lines:
        return empty_collection()
    return feature_collection(line_feature(line) for line in [*lng_lines, *lat_lines])


def tick_collection(segments):
    return feature_collection(line_feature(segment) for segment in segments)


def border_collection(bounds):
    """A single closed line around the bounds, or nothing without bounds."""
    if bounds is None:
        return empty_collection()
    return feature_collection([line_feature(bounds.ring())])


def label_feature(position, label, rotate, anchor, icon):
    return point_feature(position, {
        "label": label,
        "rotate": rotate,
        "anchor": anchor,
        "icon": icon,
    })
