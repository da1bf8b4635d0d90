"""Tests for hotspot presets."""

from __future__ import annotations

import json
import logging

import pytest

from pyportrait.hotspot import Hotspot
from pyportrait.presets import DEFAULT_PRESETS, apply_preset, load_presets, validate_preset


class TestValidatePreset:
    def test_default_presets_are_valid(self):
        for name, triples in DEFAULT_PRESETS.items():
            assert len(validate_preset(triples)) == 4

    @pytest.mark.parametrize("triples", [
        "nope",
        [[1, 2]],
        [[1, 2, 3, 4]],
        [[1, "a", 3]],
        [[1, 2, -3]],
        [[True, 2, 3]],
    ])
    def test_malformed(self, triples):
        with pytest.raises(ValueError):
            validate_preset(triples)

    def test_converts_to_float(self):
        assert validate_preset([(1, 2, 3)]) == [[1., 2., 3.]]


class TestLoadPresets:
    def test_round_trip_file(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text(json.dumps({"face.png": [[10, 20, 30], [40, 50, 60]]}))
        assert load_presets(str(path)) == {"face.png": [[10., 20., 30.], [40., 50., 60.]]}

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text(json.dumps([[1, 2, 3]]))
        with pytest.raises(ValueError):
            load_presets(str(path))

    def test_bad_entry(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text(json.dumps({"face.png": [[1, 2, -1]]}))
        with pytest.raises(ValueError):
            load_presets(str(path))


class TestApplyPreset:
    def test_sets_geometry_without_resampling(self):
        hotspots = [Hotspot(), Hotspot()]
        apply_preset(hotspots, [[1, 2, 3], [4, 5, 6]])
        assert [(h.x, h.y, h.r) for h in hotspots] == [(1, 2, 3), (4, 5, 6)]
        assert all(len(h.points) == 0 for h in hotspots)

    def test_short_preset_keeps_remaining_hotspots(self, caplog):
        hotspots = [Hotspot(), Hotspot(9, 9, 9)]
        with caplog.at_level(logging.WARNING, logger="pyportrait"):
            apply_preset(hotspots, [[1, 2, 3]])
        assert (hotspots[0].x, hotspots[0].y, hotspots[0].r) == (1, 2, 3)
        assert (hotspots[1].x, hotspots[1].y, hotspots[1].r) == (9, 9, 9)
        assert "1 entries for 2 hotspots" in caplog.text
