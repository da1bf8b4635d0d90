"""
Utility functions for Voronoi construction and matplotlib output.

This module provides helper functions for:
- Converting shapely geometries to matplotlib patches
- Converting 0-255 RGBA colours to matplotlib colours
- Closing the infinite regions of a scipy Voronoi diagram
- Clipping regions to a rectangle
- Saving figures without margins
"""

from __future__ import annotations

from typing import Any, Sequence, Union
import numpy as np
from numpy.typing import NDArray
import matplotlib.pyplot as pl
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from matplotlib.path import Path
from matplotlib.patches import PathPatch
from shapely.geometry import Polygon, MultiPolygon
from scipy.spatial import Voronoi


def polygon_patch(
    polygon: Union[Polygon, MultiPolygon],
    **kwargs: Any
) -> PathPatch:
    """
    Create a matplotlib PathPatch from a shapely Polygon or MultiPolygon.

    Parameters
    ----------
    polygon : shapely.geometry.Polygon or shapely.geometry.MultiPolygon
        The polygon geometry to convert to a matplotlib patch.
    **kwargs : dict
        Additional keyword arguments passed to matplotlib.patches.PathPatch
        (e.g., facecolor, edgecolor, alpha, linewidth).

    Returns
    -------
    matplotlib.patches.PathPatch
        A patch that can be added to a matplotlib axes via ax.add_patch().

    Raises
    ------
    TypeError
        If polygon is not a Polygon or MultiPolygon.

    Examples
    --------
    >>> from shapely.geometry import Polygon
    >>> poly = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
    >>> patch = polygon_patch(poly, facecolor='blue', edgecolor='black')
    >>> ax.add_patch(patch)
    """
    def ring_to_codes(n):
        """Generate path codes for a ring with n points."""
        codes = [Path.LINETO] * n
        codes[0] = Path.MOVETO
        codes[-1] = Path.CLOSEPOLY
        return codes

    def polygon_to_path(poly):
        """Convert a single Polygon to vertices and codes."""
        vertices = []
        codes = []

        ext_coords = list(poly.exterior.coords)
        vertices.extend(ext_coords)
        codes.extend(ring_to_codes(len(ext_coords)))

        for interior in poly.interiors:
            int_coords = list(interior.coords)
            vertices.extend(int_coords)
            codes.extend(ring_to_codes(len(int_coords)))

        return vertices, codes

    vertices = []
    codes = []

    if isinstance(polygon, MultiPolygon):
        for poly in polygon.geoms:
            v, c = polygon_to_path(poly)
            vertices.extend(v)
            codes.extend(c)
    elif isinstance(polygon, Polygon):
        vertices, codes = polygon_to_path(polygon)
    else:
        raise TypeError(f"Expected Polygon or MultiPolygon, got {type(polygon)}")

    path = Path(vertices, codes)
    return PathPatch(path, **kwargs)


def rgba_to_mpl(color: Sequence[float]) -> tuple[float, float, float, float]:
    """
    Convert an (r, g, b[, a]) colour with 0-255 channels to matplotlib's 0-1.

    Examples
    --------
    >>> rgba_to_mpl((255, 0, 0))
    (1.0, 0.0, 0.0, 1.0)
    """
    if len(color) == 3:
        color = tuple(color) + (255,)
    return tuple(float(c) / 255. for c in color)


def savefig_marginless(fn: str, fig: Figure, ax: Axes, **kwargs: Any) -> None:
    """
    Save a figure with no margins or whitespace.

    Parameters
    ----------
    fn : str
        Output filename.
    fig : matplotlib.figure.Figure
        Figure to save.
    ax : matplotlib.axes.Axes
        Axes to configure.
    **kwargs : dict
        Additional arguments passed to fig.savefig().
    """
    ax.set_axis_off()
    fig.subplots_adjust(top=1, bottom=0, right=1, left=0, hspace=0, wspace=0)
    ax.margins(0, 0)
    ax.xaxis.set_major_locator(pl.NullLocator())
    ax.yaxis.set_major_locator(pl.NullLocator())
    fig.savefig(fn, bbox_inches='tight', pad_inches=0, **kwargs)


def clip_region(region: Polygon, box: Polygon) -> list[tuple[float, float]]:
    """
    Intersect a convex Voronoi region with a rectangle.

    Parameters
    ----------
    region : shapely.geometry.Polygon
        The (finite) Voronoi region.
    box : shapely.geometry.Polygon
        Clipping rectangle.

    Returns
    -------
    list of tuple
        Boundary vertices of the clipped region without the repeated
        closing vertex. Empty if the region misses the rectangle or only
        touches it along an edge or corner.
    """
    geom = region.intersection(box)
    if geom.is_empty or not isinstance(geom, Polygon) or geom.area <= 0:
        return []
    return [(float(x), float(y)) for x, y in geom.exterior.coords[:-1]]


def voronoi_finite_polygons_2d(
    vor: Voronoi,
    radius: float | None = None
) -> tuple[list[list[int]], NDArray[np.floating]]:
    """
    copied from https://gist.github.com/pv/8036995

    Reconstruct infinite voronoi regions in a 2D diagram to finite
    regions.

    Parameters
    ----------
    vor : Voronoi
        Input diagram
    radius : float, optional
        Distance to 'points at infinity'.

    Returns
    -------
    regions : list of tuples
        Indices of vertices in each revised Voronoi regions.
    vertices : list of tuples
        Coordinates for revised Voronoi vertices. Same as coordinates
        of input vertices, with 'points at infinity' appended to the
        end.

    """

    if vor.points.shape[1] != 2:
        raise ValueError("Requires 2D input")

    new_regions = [ None for i in range(len(vor.point_region)) ]
    new_vertices = vor.vertices.tolist()

    center = vor.points.mean(axis=0)
    if radius is None:
        radius = np.ptp(vor.points, axis=0).max() * 2

    # Construct a map containing all ridges for a given point
    all_ridges = {}
    for (p1, p2), (v1, v2) in zip(vor.ridge_points, vor.ridge_vertices):
        all_ridges.setdefault(p1, []).append((p2, v1, v2))
        all_ridges.setdefault(p2, []).append((p1, v1, v2))

    # Reconstruct infinite regions
    for p1, region in enumerate(vor.point_region):

        vertices = vor.regions[region]

        if all(v >= 0 for v in vertices):
            # finite region
            new_regions[p1] = vertices
            continue

        # reconstruct a non-finite region
        ridges = all_ridges[p1]
        new_region = [v for v in vertices if v >= 0]

        for p2, v1, v2 in ridges:
            if v2 < 0:
                v1, v2 = v2, v1
            if v1 >= 0:
                # finite ridge: already in the region
                continue

            # Compute the missing endpoint of an infinite ridge

            t = vor.points[p2] - vor.points[p1] # tangent
            t /= np.linalg.norm(t)
            n = np.array([-t[1], t[0]])  # normal

            midpoint = vor.points[[p1, p2]].mean(axis=0)
            direction = np.sign(np.dot(midpoint - center, n)) * n
            far_point = vor.vertices[v2] + direction * radius

            new_region.append(len(new_vertices))
            new_vertices.append(far_point.tolist())

        # sort region counterclockwise
        vs = np.asarray([new_vertices[v] for v in new_region])
        c = vs.mean(axis=0)
        angles = np.arctan2(vs[:,1] - c[1], vs[:,0] - c[0])
        new_region = np.array(new_region)[np.argsort(angles)]

        # finish
        new_regions[p1] = new_region.tolist()
    return new_regions, np.asarray(new_vertices)
