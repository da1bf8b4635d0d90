"""
Point classification by image colour and nearest enclosing hotspot.

Each sample point that survives classification becomes a Voronoi site
carrying its colour and the hotspot it belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray
import progressbar

from pyportrait.hotspot import Hotspot
from pyportrait.image import PortraitImage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifiedPoint:
    """
    A sample point with its colour and hotspot association.

    ``hotspot`` is an index into the hotspot sequence the point was
    classified against; the hotspots themselves stay owned by the session.
    """
    x: int
    y: int
    color: tuple[int, int, int, int]
    hotspot: int
    distance: float


def closest_hotspot(
    x: float,
    y: float,
    hotspots: Sequence[Hotspot],
) -> tuple[int | None, float | None]:
    """
    Find the nearest hotspot whose disk strictly contains (x, y).

    Parameters
    ----------
    x, y : float
        Query coordinate in image space.
    hotspots : sequence of Hotspot
        Candidates, in priority order for ties.

    Returns
    -------
    index : int or None
        Position of the closest enclosing hotspot, None if no hotspot
        contains the point.
    distance : float or None
        Distance to that hotspot's center.
    """
    closest = None
    closest_dist = None

    for i, h in enumerate(hotspots):
        d = h.distance_to(x, y)
        if d < h.r and (closest_dist is None or d < closest_dist):
            closest = i
            closest_dist = d

    return closest, closest_dist


def nearest_hotspots(
    points: ArrayLike,
    hotspots: Sequence[Hotspot],
) -> tuple[NDArray[np.int_], NDArray[np.floating]]:
    """
    Vectorized :func:`closest_hotspot` for an (n, 2) array of points.

    Returns
    -------
    index : numpy.ndarray of shape (n,)
        Closest enclosing hotspot per point, -1 where there is none.
    distance : numpy.ndarray of shape (n,)
        Distance to that hotspot, NaN where there is none.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    n = points.shape[0]

    if len(hotspots) == 0 or n == 0:
        return np.full(n, -1, dtype=int), np.full(n, np.nan)

    centers = np.array([(h.x, h.y) for h in hotspots])
    radii = np.array([h.r for h in hotspots])

    d = np.hypot(points[:, 0, None] - centers[None, :, 0],
                 points[:, 1, None] - centers[None, :, 1])
    inside = d < radii[None, :]

    # argmin returns the first minimum, which keeps the iteration-order tie-break
    masked = np.where(inside, d, np.inf)
    index = np.argmin(masked, axis=1)
    distance = masked[np.arange(n), index]

    enclosed = inside.any(axis=1)
    index[~enclosed] = -1
    distance[~enclosed] = np.nan

    return index, distance


def in_bounds(points: ArrayLike, width: int, height: int) -> NDArray[np.bool_]:
    """Mask of points within [0, width] x [0, height], both edges included."""
    points = np.asarray(points).reshape(-1, 2)
    x, y = points[:, 0], points[:, 1]
    return ~((x < 0) | (x > width) | (y < 0) | (y > height))


def classify_points(
    points: ArrayLike,
    image: PortraitImage,
    hotspots: Sequence[Hotspot],
    verbose: bool = False,
) -> list[ClassifiedPoint]:
    """
    Turn raw sample points into Voronoi sites.

    Points outside the image, and points not strictly inside any hotspot,
    are dropped. The remaining points keep their input order.

    Parameters
    ----------
    points : array-like of shape (n, 2)
        Integer sample coordinates (background and hotspot points).
    image : PortraitImage
        Source of the site colours.
    hotspots : sequence of Hotspot
        Hotspots to associate the points with.
    verbose : bool, optional
        Show progress (default: False).

    Returns
    -------
    list of ClassifiedPoint
    """
    points = np.asarray(points, dtype=int).reshape(-1, 2)

    index, distance = nearest_hotspots(points, hotspots)
    keep = np.flatnonzero(in_bounds(points, image.width, image.height) & (index >= 0))

    if verbose:
        bar = progressbar.ProgressBar(
                    max_value = max(len(keep), 1),
                    widgets = [
                        progressbar.SimpleProgress()," ",
                        progressbar.ETA()," classifying points ..."
                    ]
            )

    classified = []
    for count, i in enumerate(keep):
        x, y = int(points[i, 0]), int(points[i, 1])
        classified.append(ClassifiedPoint(x=x,
                                          y=y,
                                          color=image.color_at(x, y),
                                          hotspot=int(index[i]),
                                          distance=float(distance[i]),
                                          ))
        if verbose:
            bar.update(count + 1)

    logger.debug(f"Classified {len(classified)} of {len(points)} points")
    return classified
