"""Export an attached graticule as a map style fragment.

The fragment holds the GeoJSON sources and layer descriptors the layer
has put on its host, plus the options that produced them, so it can be
merged into a static style document.
"""
import pathlib

from jinja2 import Template

TEMPLATE = """
{
  "options": {{ options | tojson(indent=2) }},
  "sources": {{ sources | tojson(indent=2) }},
  "layers": {{ layers | tojson(indent=2) }}
}"""


def collect(layer):
    """Sources and layer descriptors of ``layer`` currently on its host.

    Returns
    -------
    tuple of (dict, list)
        Sources keyed by id and layer descriptors in sub-layer order.
    """
    host = layer.host
    sources = {}
    layers = []
    if host is None:
        return sources, layers
    for layer_id in layer.get_layer_ids() or ():
        source = host.get_source(layer_id)
        if source is not None:
            sources[layer_id] = {"type": "geojson", "data": source.data}
        descriptor = host.get_layer(layer_id)
        if descriptor is not None:
            layers.append(descriptor)
    return sources, layers


def render_layer_config(layer):
    """Render the style fragment of ``layer`` as a JSON string."""
    sources, layers = collect(layer)
    return Template(TEMPLATE).render(
        options=layer.to_dict(),
        sources=sources,
        layers=layers,
    )


def write_layer_config(layer, path="graticule_layers.json"):
    """Write the style fragment of ``layer`` to ``path``.

    Parameters
    ----------
    layer : GraticuleLayer
        An attached layer.
    path : str or pathlib.Path, optional
        Output file, by default "graticule_layers.json".

    Returns
    -------
    pathlib.Path
        The written file.
    """
    output_path = pathlib.Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as fp:
        fp.write(render_layer_config(layer))
    return output_path
