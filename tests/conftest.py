"""Shared test fixtures."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from pyportrait.diagram import Cell
from pyportrait.hotspot import Hotspot
from pyportrait.image import PortraitImage


def gradient_pixels(width: int = 100, height: int = 100) -> np.ndarray:
    """RGBA image whose red channel encodes x and green channel encodes y."""
    ys, xs = np.indices((height, width))
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = xs % 256
    pixels[..., 1] = ys % 256
    pixels[..., 2] = 128
    pixels[..., 3] = 255
    return pixels


class FakeBuilder:
    """Diagram builder returning a unit square around every site."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def build(self, sites, bbox):
        from pyportrait.diagram import DiagramBuildError

        self.calls.append((list(sites), bbox))
        if self.fail:
            raise DiagramBuildError("fake failure")
        return [
            Cell(site=s, boundary=[(s.x - 0.5, s.y - 0.5), (s.x + 0.5, s.y - 0.5),
                                   (s.x + 0.5, s.y + 0.5), (s.x - 0.5, s.y + 0.5)])
            for s in sites
        ]


@pytest.fixture
def image() -> PortraitImage:
    return PortraitImage(gradient_pixels(), name="gradient.png")


@pytest.fixture
def hotspot() -> Hotspot:
    return Hotspot(50, 50, 20)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def fake_builder() -> FakeBuilder:
    return FakeBuilder()
