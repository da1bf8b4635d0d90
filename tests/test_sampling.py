"""Tests for the background scatter."""

from __future__ import annotations

import numpy as np
import pytest

from pyportrait.hotspot import Hotspot
from pyportrait.sampling import combine_points, generate_background_points


class TestBackground:
    def test_count_and_bounds(self, rng):
        pts = generate_background_points(40, 30, 1000, rng)
        assert pts.shape == (1000, 2)
        assert pts[:, 0].min() >= 0 and pts[:, 0].max() < 40
        assert pts[:, 1].min() >= 0 and pts[:, 1].max() < 30

    def test_seeded_generation_is_reproducible(self):
        a = generate_background_points(100, 100, 50, np.random.default_rng(3))
        b = generate_background_points(100, 100, 50, np.random.default_rng(3))
        assert np.array_equal(a, b)

    def test_unseeded_calls_differ(self):
        a = generate_background_points(1000, 1000, 100)
        b = generate_background_points(1000, 1000, 100)
        assert not np.array_equal(a, b)

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-5, 5)])
    def test_invalid_size(self, width, height):
        with pytest.raises(ValueError):
            generate_background_points(width, height, 10)

    def test_negative_count(self):
        with pytest.raises(ValueError):
            generate_background_points(10, 10, -1)


class TestCombine:
    def test_background_then_hotspots_in_order(self, rng):
        background = np.array([[1, 1], [2, 2]])
        a = Hotspot(10, 10, 3)
        b = Hotspot(20, 20, 3)
        a.resample(3, rng)
        b.resample(4, rng)

        combined = combine_points(background, [a, b])

        assert combined.shape == (9, 2)
        assert np.array_equal(combined[:2], background)
        assert np.array_equal(combined[2:5], a.points)
        assert np.array_equal(combined[5:], b.points)

    def test_no_hotspots(self):
        background = np.array([[1, 2]])
        assert np.array_equal(combine_points(background, []), background)
