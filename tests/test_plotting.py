"""Tests for matplotlib output and the interactive viewer."""

from __future__ import annotations

from types import SimpleNamespace

import matplotlib.pyplot as pl
import pytest

from pyportrait.hotspot import Hotspot
from pyportrait.image import PortraitImage
from pyportrait.interaction import ManipMode
from pyportrait.plotting import plot_commands, plot_hotspots, render_to_file
from pyportrait.render import FilledPolygon, WeightedPoint
from pyportrait.session import PortraitSession
from pyportrait.viewer import PortraitViewer
from tests.conftest import gradient_pixels


@pytest.fixture
def session():
    image = PortraitImage(gradient_pixels(100, 100), name="gradient.png")
    return PortraitSession([image, PortraitImage(gradient_pixels(80, 80), name="other.png")],
                           presets={"gradient.png": [[50, 50, 30]]},
                           hotspot_count=1,
                           spawn_count=150,
                           seed=3)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    pl.close("all")


COMMANDS = [
    FilledPolygon(vertices=((0, 0), (10, 0), (10, 10)), color=(255, 0, 0, 255)),
    WeightedPoint(x=5, y=5, color=(0, 255, 0, 255), weight=4.),
]


class TestPlotCommands:
    def test_creates_figure(self):
        fig, ax = plot_commands(COMMANDS, 20, 20)
        assert len(ax.collections) == 2
        assert ax.get_ylim() == (20, 0)

    def test_uses_given_axes(self):
        fig, ax = pl.subplots()
        assert plot_commands(COMMANDS, 20, 20, ax=ax) is ax

    def test_zero_weight_points_are_not_drawn(self):
        commands = [WeightedPoint(x=1, y=1, color=(0, 0, 0, 255), weight=0.)]
        fig, ax = plot_commands(commands, 20, 20)
        assert len(ax.collections) == 0


class TestPlotHotspots:
    def test_rings(self):
        fig, ax = pl.subplots()
        plot_hotspots([Hotspot(10, 10, 5), Hotspot(30, 30, 8)], ax)
        assert len(ax.patches) == 2

    @pytest.mark.parametrize("mode", [ManipMode.MOVE, ManipMode.SCALE])
    def test_highlight(self, mode):
        fig, ax = pl.subplots()
        plot_hotspots([Hotspot(10, 10, 5), Hotspot(30, 30, 25)], ax, active=1, mode=mode)
        assert len(ax.patches) == 3


def test_render_to_file(session, tmp_path):
    path = tmp_path / "portrait.png"
    render_to_file(session, str(path), show_hotspots=True, dpi=50)
    assert path.exists()
    assert path.stat().st_size > 0


class TestViewer:
    def event(self, viewer, x, y, **kwargs):
        return SimpleNamespace(inaxes=viewer.ax, xdata=x, ydata=y, button=1, **kwargs)

    def test_drag_moves_hotspot(self, session):
        viewer = PortraitViewer(session)
        viewer.on_move(self.event(viewer, 50, 50))
        assert session.controller.mode is ManipMode.MOVE

        viewer.on_press(self.event(viewer, 50, 50))
        viewer.on_move(self.event(viewer, 40, 60))
        viewer.on_release(self.event(viewer, 40, 60))

        (h,) = session.hotspots
        assert (h.x, h.y) == (40, 60)
        assert not session.controller.dragging

    def test_press_outside_axes_is_ignored(self, session):
        viewer = PortraitViewer(session)
        viewer.on_press(SimpleNamespace(inaxes=None, xdata=None, ydata=None, button=1))
        assert not session.controller.dragging

    def test_keys(self, session):
        viewer = PortraitViewer(session)
        viewer.on_key(SimpleNamespace(key="d"))
        assert not session.debug
        viewer.on_key(SimpleNamespace(key=" "))
        assert session.image_index == 1
