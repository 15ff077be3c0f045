"""Tests for the graticule.export module."""

import json

from graticule.export import collect, render_layer_config, write_layer_config
from graticule.layer import GraticuleLayer


class TestCollect:
    """Tests for the collect function."""

    def test_detached_layer(self, options):
        """A detached layer has nothing on a host."""
        assert collect(GraticuleLayer(options)) == ({}, [])

    def test_attached_layer(self, host, options):
        """Sources and layers should come in sub-layer order."""
        layer = GraticuleLayer(options).add_to(host)
        sources, layers = collect(layer)

        ids = layer.get_layer_ids()
        assert list(sources) == list(ids)
        assert [d["id"] for d in layers] == list(ids)
        assert sources[ids.border]["type"] == "geojson"

    def test_hidden_layers_skipped(self, host, options):
        """Hidden sub-layers are not exported."""
        layer = GraticuleLayer(options, show_grid=False, show_label=False).add_to(host)
        sources, layers = collect(layer)
        assert len(sources) == 2
        assert [d["type"] for d in layers] == ["line", "line"]


class TestRenderLayerConfig:
    """Tests for render_layer_config and write_layer_config."""

    def test_valid_json(self, host, options):
        """The fragment should parse and contain the label texts."""
        layer = GraticuleLayer(options).add_to(host)
        config = json.loads(render_layer_config(layer))

        assert set(config) == {"options", "sources", "layers"}
        assert config["options"]["interval"] == 5
        assert len(config["layers"]) == 4
        label_source = config["sources"][layer.get_layer_ids().label]
        labels = [f["properties"]["label"] for f in label_source["data"]["features"]]
        assert "120°0'0\"E" in labels

    def test_write(self, host, options, temp_dir):
        """The fragment should be written, creating directories."""
        layer = GraticuleLayer(options).add_to(host)
        path = write_layer_config(layer, temp_dir / "style" / "graticule.json")

        assert path.exists()
        assert json.loads(path.read_text())["layers"][0]["id"] == layer.get_layer_ids().grid
