"""
Interactive matplotlib viewer for a portrait session.

Controls:
  - space: next portrait
  - any other key: toggle the hotspot overlay
  - click and drag a hotspot to move it (inside) or scale it (edge ring)
"""

from __future__ import annotations

import logging

import matplotlib.pyplot as pl
from matplotlib.axes import Axes

from pyportrait import config
from pyportrait.plotting import plot_commands, plot_hotspots
from pyportrait.session import PortraitSession

logger = logging.getLogger(__name__)


class PortraitViewer:
    """
    Connects a :class:`PortraitSession` to matplotlib's event loop.

    Every handled event re-runs the pipeline and redraws the axes, so
    hotspot changes from a drag show up in the next frame.

    Parameters
    ----------
    session : PortraitSession
        Session to display and manipulate.
    ax : matplotlib.axes.Axes, optional
        Axes to draw into. If None, a new figure is created.
    """

    def __init__(self, session: PortraitSession, ax: Axes | None = None) -> None:
        self.session = session

        if ax is None:
            self.fig, self.ax = pl.subplots(1, 1, facecolor='k')
        else:
            self.fig, self.ax = ax.figure, ax

        self.tooltip = self.fig.text(0.5, 0.98, config.TOOLTIP,
                                     color = 'w',
                                     ha = 'center',
                                     va = 'top',
                                     fontsize = 8,
                                     )
        self.fig.canvas.mpl_connect("button_press_event", self.on_press)
        self.fig.canvas.mpl_connect("motion_notify_event", self.on_move)
        self.fig.canvas.mpl_connect("button_release_event", self.on_release)
        self.fig.canvas.mpl_connect("key_press_event", self.on_key)

        self.redraw()

    def redraw(self) -> None:
        session = self.session
        frame = session.render_frame()
        img = session.image

        self.ax.clear()
        plot_commands(frame.commands, img.width, img.height, ax=self.ax)
        if session.debug:
            controller = session.controller
            plot_hotspots(session.hotspots,
                          self.ax,
                          active = controller.active,
                          mode = controller.mode,
                          ring_thickness = controller.ring_thickness,
                          )
        self.ax.set_axis_off()
        self.fig.canvas.draw_idle()

    def on_press(self, event) -> None:
        if event.inaxes != self.ax or event.xdata is None or event.ydata is None:
            return
        if event.button != 1:
            return
        self.session.controller.press(float(event.xdata), float(event.ydata))
        self.redraw()

    def on_move(self, event) -> None:
        if event.xdata is None or event.ydata is None:
            return
        x, y = float(event.xdata), float(event.ydata)
        controller = self.session.controller

        if controller.dragging:
            if controller.drag(x, y):
                self.redraw()
        else:
            previous = (controller.active, controller.mode)
            controller.hover(x, y)
            if self.session.debug and previous != (controller.active, controller.mode):
                self.redraw()

    def on_release(self, event) -> None:
        controller = self.session.controller
        if not controller.dragging:
            return
        controller.release()
        self.redraw()

    def on_key(self, event) -> None:
        if event.key == " ":
            self.session.next_portrait()
        else:
            debug = self.session.toggle_debug()
            logger.debug(f"Hotspot overlay {'on' if debug else 'off'}")
        self.redraw()

    def show(self) -> None:
        pl.show()
