"""
Background point scatter and per-frame point aggregation.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from pyportrait.hotspot import Hotspot


def generate_background_points(
    width: int,
    height: int,
    count: int,
    rng: np.random.Generator | None = None,
) -> NDArray[np.int_]:
    """
    Scatter points uniformly over the image rectangle.

    Parameters
    ----------
    width, height : int
        Image size in pixels.
    count : int
        Number of points.
    rng : numpy.random.Generator, optional
        Random source. Only a seeded generator gives a reproducible scatter.

    Returns
    -------
    numpy.ndarray of shape (count, 2)
        Integer coordinates in [0, width) x [0, height).

    Raises
    ------
    ValueError
        If the image size is not positive or ``count`` is negative.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")
    if count < 0:
        raise ValueError(f"Point count must be non-negative, got {count}")

    if rng is None:
        rng = np.random.default_rng()

    x = rng.integers(0, width, size=count)
    y = rng.integers(0, height, size=count)
    return np.column_stack([x, y]).astype(int)


def combine_points(background: NDArray, hotspots: Sequence[Hotspot]) -> NDArray[np.int_]:
    """Background points followed by the points of every hotspot, in order."""
    chunks = [np.asarray(background, dtype=int).reshape(-1, 2)]
    chunks.extend(h.points.reshape(-1, 2) for h in hotspots)
    return np.concatenate(chunks, axis=0)
