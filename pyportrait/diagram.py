"""
Voronoi diagram construction for classified sites.

The diagram algorithm is a replaceable collaborator: :class:`DiagramAdapter`
accepts any object with a ``build(sites, bbox)`` method, which keeps the
render decisions testable with a fake builder. The default
:class:`VoronoiBuilder` uses scipy's Qhull bindings and shapely clipping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Protocol, Sequence

import numpy as np
from scipy.spatial import Voronoi, QhullError
from shapely.geometry import Polygon, box

from pyportrait.classifier import ClassifiedPoint
from pyportrait.tools import clip_region, voronoi_finite_polygons_2d

logger = logging.getLogger(__name__)


class DiagramBuildError(RuntimeError):
    """The diagram service could not build a diagram for the given sites."""


@dataclass(frozen=True)
class BoundingBox:
    """Clipping rectangle in image space (top < bottom, y points down)."""
    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def for_image(cls, width: int, height: int, inset: float = 1) -> "BoundingBox":
        """Image rectangle shrunk by ``inset`` on every side."""
        return cls(left=inset, right=width - inset, top=inset, bottom=height - inset)

    def to_polygon(self) -> Polygon:
        return box(self.left, self.top, self.right, self.bottom)


@dataclass
class Cell:
    """
    A diagram cell and the site it was grown from.

    ``boundary`` holds the vertices of the closed polygon in order,
    without repeating the first vertex. An empty boundary marks a
    degenerate cell that must not be drawn.
    """
    site: ClassifiedPoint
    boundary: list[tuple[float, float]] = field(default_factory=list)

    @property
    def is_degenerate(self) -> bool:
        return len(self.boundary) == 0


class DiagramBuilder(Protocol):
    def build(self, sites: Sequence[ClassifiedPoint], bbox: BoundingBox) -> list[Cell]:
        ...


class VoronoiBuilder:
    """
    Build clipped Voronoi cells with scipy.spatial.Voronoi.

    Sites sharing a coordinate are collapsed onto the first of them, so
    the result has one cell per distinct coordinate, in site order.
    Two sites, or any number of sites on one line, are split along the
    bisectors of neighbouring sites instead of going through Qhull.
    """

    def build(self, sites: Sequence[ClassifiedPoint], bbox: BoundingBox) -> list[Cell]:
        unique = {}
        for site in sites:
            unique.setdefault((site.x, site.y), site)
        sites = list(unique.values())

        if len(sites) == 0:
            return []

        clip_box = bbox.to_polygon()

        if len(sites) == 1:
            # a lone site owns the whole rectangle
            return [Cell(site=sites[0], boundary=clip_region(clip_box, clip_box))]

        coords = np.array([(s.x, s.y) for s in sites], dtype=float)
        extent = max(bbox.right - bbox.left, bbox.bottom - bbox.top, np.ptp(coords, axis=0).max())

        if np.linalg.matrix_rank(coords - coords[0]) < 2:
            # Qhull needs a full-dimensional input
            return _collinear_cells(sites, coords, clip_box, reach=4 * extent + 1)

        try:
            vor = Voronoi(coords)
        except QhullError as e:
            raise DiagramBuildError(f"Voronoi construction failed for {len(sites)} sites: {e}") from e

        regions, vertices = voronoi_finite_polygons_2d(vor, radius=4 * extent + 1)

        cells = []
        for site, region in zip(sites, regions):
            if len(region) < 3:
                cells.append(Cell(site=site))
                continue
            geom = Polygon(vertices[region].tolist())
            cells.append(Cell(site=site, boundary=clip_region(geom, clip_box)))

        return cells


def _half_plane(site: np.ndarray, other: np.ndarray, reach: float) -> Polygon:
    """The part within ``reach`` of the bisector of ``site`` and ``other``, on the side of ``site``."""
    mid = (site + other) / 2.
    normal = (other - site) / np.hypot(*(other - site))
    tangent = np.array([-normal[1], normal[0]])
    return Polygon([mid + reach * tangent,
                    mid + reach * (tangent - normal),
                    mid - reach * (tangent + normal),
                    mid - reach * tangent,
                    ])


def _collinear_cells(
    sites: list[ClassifiedPoint],
    coords: np.ndarray,
    clip_box: Polygon,
    reach: float,
) -> list[Cell]:
    """
    Cells of sites lying on one line.

    The cells are parallel strips, so each one is bounded only by the
    bisectors with its neighbours along the line.
    """
    offsets = coords - coords[0]
    direction = offsets[np.argmax(np.hypot(offsets[:, 0], offsets[:, 1]))]
    order = np.argsort(offsets @ direction, kind="stable")

    boundaries = [None] * len(sites)
    for k, i in enumerate(order):
        region = clip_box
        if k > 0:
            region = region.intersection(_half_plane(coords[i], coords[order[k - 1]], reach))
        if k < len(order) - 1:
            region = region.intersection(_half_plane(coords[i], coords[order[k + 1]], reach))
        boundaries[i] = clip_region(region, clip_box)

    return [Cell(site=site, boundary=boundary) for site, boundary in zip(sites, boundaries)]

class DiagramAdapter:
    """
    Submit classified points to a diagram builder once per frame.

    Parameters
    ----------
    builder : DiagramBuilder, optional
        Diagram service (default: :class:`VoronoiBuilder`).

    Attributes
    ----------
    diagram : list of Cell or None
        Cells of the last successful build. Cleared before every rebuild,
        so a failed build leaves it as None.
    """

    def __init__(self, builder: DiagramBuilder | None = None) -> None:
        self.builder = builder if builder is not None else VoronoiBuilder()
        self.diagram = None

    def recycle(self) -> None:
        """Drop the previous diagram."""
        self.diagram = None

    def build(self, sites: Sequence[ClassifiedPoint], bbox: BoundingBox) -> list[Cell]:
        """
        Build the cells for ``sites`` inside ``bbox``.

        Raises
        ------
        DiagramBuildError
            If the builder cannot handle the sites.
        """
        self.recycle()
        cells = self.builder.build(list(sites), bbox)
        self.diagram = cells
        logger.debug(f"Built diagram with {len(cells)} cells from {len(sites)} sites")
        return cells
