"""
Drawing of render commands and the hotspot overlay with matplotlib.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence
import matplotlib.pyplot as pl
from matplotlib import collections as mplcoll
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle, Wedge
from shapely.geometry import Polygon

from pyportrait import config
from pyportrait.hotspot import Hotspot
from pyportrait.interaction import ManipMode
from pyportrait.render import DrawCommand, FilledPolygon, WeightedPoint
from pyportrait.tools import polygon_patch, rgba_to_mpl, savefig_marginless

if TYPE_CHECKING:
    from pyportrait.session import PortraitSession


def plot_commands(
    commands: Sequence[DrawCommand],
    width: int,
    height: int,
    ax: Axes | None = None,
    bg_color: Any = 'k',
) -> tuple[Figure, Axes] | Axes:
    """
    Draw filled cells and stipple points in image coordinates.

    Parameters
    ----------
    commands : sequence of FilledPolygon or WeightedPoint
        Output of :func:`pyportrait.render.render_cells`.
    width, height : int
        Image size; sets the axes limits (y axis pointing down).
    ax : matplotlib.axes.Axes, optional
        Axes to plot on. If None, creates new figure.
    bg_color : color-like, optional
        Background color (default: 'k').

    Returns
    -------
    fig, ax : matplotlib Figure and Axes
        Only if ax was None; otherwise returns just ax.
    """

    generate_figure = ax is None

    if generate_figure:
        fig, ax = pl.subplots(1,1)

    # set background patch
    ax.add_patch(Rectangle((0, 0), width, height,
                           facecolor = bg_color,
                           edgecolor = 'None',
                           lw = 0,
                           zorder = 0,
                           ))

    polygons = []
    dots = []
    for command in commands:
        if isinstance(command, FilledPolygon):
            polygons.append(polygon_patch(Polygon(command.vertices),
                                          facecolor = rgba_to_mpl(command.color),
                                          edgecolor = rgba_to_mpl(command.outline_color),
                                          lw = command.outline_weight,
                                          ))
        elif isinstance(command, WeightedPoint) and command.weight > 0:
            # stroke weight is the dot diameter in image units
            dots.append(Circle((command.x, command.y),
                               radius = command.weight / 2.,
                               facecolor = rgba_to_mpl(command.color),
                               edgecolor = 'None',
                               ))

    if polygons:
        ax.add_collection(mplcoll.PatchCollection(polygons, match_original=True, zorder=1))
    if dots:
        ax.add_collection(mplcoll.PatchCollection(dots, match_original=True, zorder=2))

    ax.set_aspect('equal')
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)

    if generate_figure:
        return fig, ax
    else:
        return ax


def plot_hotspots(
    hotspots: Sequence[Hotspot],
    ax: Axes,
    active: int | None = None,
    mode: ManipMode = ManipMode.NONE,
    ring_thickness: float = config.RING_THICKNESS,
) -> Axes:
    """
    Debug overlay: a white ring per hotspot and a highlight on the active one.

    The active hotspot gets a translucent green disk when it would be
    moved, or a green band along its edge when it would be scaled.
    """
    for h in hotspots:
        ax.add_patch(Circle((h.x, h.y), h.r,
                            facecolor = 'None',
                            edgecolor = 'w',
                            lw = 1,
                            zorder = 3,
                            ))

    if active is None or mode is ManipMode.NONE:
        return ax

    h = hotspots[active]
    highlight = rgba_to_mpl((0, 255, 0, 30))
    half = ring_thickness * 0.5

    if mode is ManipMode.MOVE:
        ax.add_patch(Circle((h.x, h.y), max(h.r - half, 0),
                            facecolor = highlight,
                            edgecolor = 'None',
                            zorder = 4,
                            ))
    else:
        # band between r - t/2 and r + t/2, in data units
        ax.add_patch(Wedge((h.x, h.y), h.r + half, 0, 360,
                           width = min(ring_thickness, h.r + half),
                           facecolor = highlight,
                           edgecolor = 'None',
                           zorder = 4,
                           ))

    return ax


def render_to_file(session: PortraitSession, path: str, show_hotspots: bool = False, **kwargs: Any) -> None:
    """
    Render one frame of ``session`` and save it without margins.

    Parameters
    ----------
    session : PortraitSession
        Session to render.
    path : str
        Output filename.
    show_hotspots : bool, optional
        Draw the hotspot overlay as well (default: False).
    **kwargs : dict
        Additional arguments passed to fig.savefig() (e.g. dpi).
    """
    frame = session.render_frame()
    img = session.image
    fig, ax = plot_commands(frame.commands, img.width, img.height)
    if show_hotspots:
        plot_hotspots(session.hotspots, ax)
    savefig_marginless(path, fig, ax, **kwargs)
    pl.close(fig)
