"""
Pixel colour lookup for portrait images.
"""

from __future__ import annotations

import logging
import os

import numpy as np
from numpy.typing import ArrayLike
from PIL import Image

logger = logging.getLogger(__name__)


class PortraitImage:
    """
    An RGBA image exposing its size and a colour lookup by coordinate.

    Parameters
    ----------
    pixels : array-like of shape (height, width, 4)
        RGBA values in [0, 255]. Arrays of shape (height, width, 3) get an
        opaque alpha channel.
    name : str, optional
        Identifier used to look up hotspot presets (usually the file name).

    Raises
    ------
    ValueError
        If the buffer is empty or not an RGB(A) image.
    """

    def __init__(self, pixels: ArrayLike, name: str | None = None) -> None:
        pixels = np.asarray(pixels)

        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(f"Expected pixel buffer of shape (h, w, 4), got {pixels.shape}")
        if pixels.shape[0] <= 0 or pixels.shape[1] <= 0:
            raise ValueError(f"Image size must be positive, got {pixels.shape[1]}x{pixels.shape[0]}")

        if pixels.shape[2] == 3:
            alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels.astype(np.uint8), alpha], axis=2)

        self.pixels = pixels.astype(np.uint8)
        self.name = name

    @classmethod
    def from_file(cls, path: str) -> "PortraitImage":
        """Decode an image file with Pillow."""
        logger.info(f"Loading portrait from: {path}")
        with Image.open(path) as im:
            pixels = np.array(im.convert("RGBA"))
        return cls(pixels, name=os.path.basename(path))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def color_at(self, x: int, y: int) -> tuple[int, int, int, int]:
        """
        RGBA colour at integer coordinate (x, y).

        Coordinates on the far edge (x == width, y == height) are clamped
        to the last column/row.
        """
        i = min(max(int(x), 0), self.width - 1)
        j = min(max(int(y), 0), self.height - 1)
        r, g, b, a = self.pixels[j, i]
        return int(r), int(g), int(b), int(a)
