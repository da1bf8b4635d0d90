"""
Movable circular regions that control local point density.

A hotspot owns a scatter of sample points inside its disk. Points deep
inside a hotspot end up as filled Voronoi cells, points close to its
edge as thinning stipple marks.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


class Hotspot:
    """
    A circle (x, y, r) in image space with its own sample points.

    Parameters
    ----------
    x, y : float, optional
        Center of the hotspot (default: 0, 0).
    r : float, optional
        Radius of the hotspot (default: 1).

    Attributes
    ----------
    points : numpy.ndarray of shape (n, 2)
        Integer sample coordinates, all within ``r`` of the center.
        Replaced (never appended to) by :meth:`resample`.

    Examples
    --------
    >>> h = Hotspot(50, 50, 20)
    >>> _ = h.resample(100)
    >>> h.points.shape
    (100, 2)
    """

    def __init__(self, x: float = 0, y: float = 0, r: float = 1) -> None:
        self.set_geometry(x, y, r)
        self.points = np.zeros((0, 2), dtype=int)

    def __repr__(self) -> str:
        return f"Hotspot(x={self.x!r}, y={self.y!r}, r={self.r!r})"

    def set_geometry(self, x: float, y: float, r: float) -> None:
        """
        Move and resize the hotspot.

        The sample points are left as they are; call :meth:`resample`
        afterwards. This lets a preset load update all hotspots first
        and resample each of them exactly once.

        Raises
        ------
        ValueError
            If ``r`` is negative.
        """
        if r < 0:
            raise ValueError(f"Hotspot radius must be non-negative, got {r}")
        self.x = float(x)
        self.y = float(y)
        self.r = float(r)

    def resample(self, count: int, rng: np.random.Generator | None = None) -> NDArray[np.int_]:
        """
        Replace the sample points with ``count`` new ones inside the disk.

        Angles are drawn uniformly from [0, 2*pi) and radial offsets
        uniformly from [0, r), so points cluster towards the center.
        Each coordinate is truncated to the integer on the center side, so
        for an integer center every point stays within r of it.

        Parameters
        ----------
        count : int
            Number of points to draw.
        rng : numpy.random.Generator, optional
            Random source. Pass a seeded generator for reproducible points.

        Returns
        -------
        numpy.ndarray of shape (count, 2)
            The new points (also stored in ``self.points``).
        """
        if rng is None:
            rng = np.random.default_rng()

        angle = rng.random(count) * 2 * np.pi
        radial = rng.random(count) * self.r
        x = radial * np.cos(angle) + self.x
        y = radial * np.sin(angle) + self.y
        x = np.where(x >= self.x, np.floor(x), np.ceil(x))
        y = np.where(y >= self.y, np.floor(y), np.ceil(y))

        self.points = np.column_stack([x, y]).astype(int)
        logger.debug(f"Resampled {count} points for {self}")
        return self.points

    def distance_to(self, x: float, y: float) -> float:
        """Euclidean distance from (x, y) to the center."""
        return float(np.hypot(x - self.x, y - self.y))

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies strictly inside the disk."""
        return self.distance_to(x, y) < self.r
