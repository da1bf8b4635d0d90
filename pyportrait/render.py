"""
Per-cell level-of-detail decisions.

Cells whose site lies deep inside a hotspot are drawn as filled polygons,
cells near a hotspot's edge shrink to a single stipple point whose weight
fades out towards the edge, everything else is skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Union

from pyportrait import config
from pyportrait.diagram import Cell
from pyportrait.hotspot import Hotspot


class RenderMode(Enum):
    FILLED = "filled"
    STIPPLE = "stipple"
    SKIP = "skip"


@dataclass(frozen=True)
class FilledPolygon:
    vertices: tuple[tuple[float, float], ...]
    color: tuple[int, int, int, int]
    outline_color: tuple[int, int, int, int] = config.OUTLINE_COLOR
    outline_weight: float = config.OUTLINE_WEIGHT


@dataclass(frozen=True)
class WeightedPoint:
    x: float
    y: float
    color: tuple[int, int, int, int]
    weight: float


DrawCommand = Union[FilledPolygon, WeightedPoint]


def check_falloff(falloff: float) -> float:
    """Return ``falloff`` unchanged, raising ValueError unless it lies in [0, 1]."""
    if not 0 <= falloff <= 1:
        raise ValueError(f"Falloff must lie in [0, 1], got {falloff}")
    return falloff


def decide_render_mode(distance: float, radius: float, falloff: float) -> RenderMode:
    """
    Pick how a cell is drawn from its site's distance to its hotspot.

    Parameters
    ----------
    distance : float
        Distance from the site to the hotspot center.
    radius : float
        Hotspot radius.
    falloff : float
        Fraction of the radius up to which cells are filled.

    Returns
    -------
    RenderMode
        FILLED for ``distance < radius*falloff``, STIPPLE for
        ``radius*falloff <= distance < radius``, SKIP otherwise.
    """
    inner = radius * falloff
    if distance < inner:
        return RenderMode.FILLED
    elif distance < radius:
        return RenderMode.STIPPLE
    return RenderMode.SKIP


def stipple_weight(
    distance: float,
    radius: float,
    falloff: float,
    max_weight: float = config.MAX_STIPPLE_WEIGHT,
) -> float:
    """
    Stroke weight of a stipple point.

    Maps ``distance`` linearly from [radius*falloff, radius] onto
    [max_weight, 0].

    Examples
    --------
    >>> stipple_weight(15, 20, 0.6)
    6.25
    """
    inner = radius * falloff
    span = radius - inner
    if span <= 0:
        return float(max_weight)
    return max_weight + (distance - inner) * (0. - max_weight) / span


def render_cell(
    cell: Cell,
    hotspots: Sequence[Hotspot],
    falloff: float,
    max_weight: float = config.MAX_STIPPLE_WEIGHT,
) -> DrawCommand | None:
    """
    Draw command for a single cell, None if nothing is drawn.

    Depends only on its arguments, so cells can be processed in any order.
    """
    if cell.is_degenerate:
        return None

    site = cell.site
    h = hotspots[site.hotspot]
    mode = decide_render_mode(site.distance, h.r, falloff)

    if mode is RenderMode.FILLED:
        return FilledPolygon(vertices=tuple(cell.boundary), color=site.color)
    elif mode is RenderMode.STIPPLE:
        return WeightedPoint(x=site.x,
                             y=site.y,
                             color=site.color,
                             weight=stipple_weight(site.distance, h.r, falloff, max_weight),
                             )
    return None


def render_cells(
    cells: Sequence[Cell],
    hotspots: Sequence[Hotspot],
    falloff: float = config.FALLOFF,
    max_weight: float = config.MAX_STIPPLE_WEIGHT,
) -> list[DrawCommand]:
    """
    Draw commands for all cells, in cell order.

    Raises
    ------
    ValueError
        If ``falloff`` is outside [0, 1].
    """
    check_falloff(falloff)
    commands = []
    for cell in cells:
        command = render_cell(cell, hotspots, falloff, max_weight)
        if command is not None:
            commands.append(command)
    return commands
