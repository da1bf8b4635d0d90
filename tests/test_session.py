"""Tests for the per-frame pipeline of a session."""

from __future__ import annotations

import numpy as np
import pytest

from pyportrait.diagram import VoronoiBuilder
from pyportrait.image import PortraitImage
from pyportrait.interaction import ManipMode
from pyportrait.render import FilledPolygon, WeightedPoint
from pyportrait.session import Frame, PortraitSession
from tests.conftest import FakeBuilder, gradient_pixels

PRESETS = {
    "gradient.png": [[50, 50, 30]],
    "small.png": [[20, 20, 10]],
}


@pytest.fixture
def images():
    return [PortraitImage(gradient_pixels(100, 100), name="gradient.png"),
            PortraitImage(gradient_pixels(60, 40), name="small.png")]


def make_session(images, **kwargs):
    kwargs.setdefault("presets", PRESETS)
    kwargs.setdefault("hotspot_count", 1)
    kwargs.setdefault("spawn_count", 200)
    kwargs.setdefault("seed", 0)
    return PortraitSession(images, **kwargs)


class TestSessionSetup:
    def test_preset_applied_and_resampled(self, images):
        session = make_session(images)
        (h,) = session.hotspots
        assert (h.x, h.y, h.r) == (50, 50, 30)
        assert len(h.points) == 200
        assert session.background.shape == (200, 2)

    def test_default_builder(self, images):
        assert isinstance(make_session(images).adapter.builder, VoronoiBuilder)

    def test_no_images(self):
        with pytest.raises(ValueError):
            PortraitSession([])

    def test_invalid_falloff(self, images):
        with pytest.raises(ValueError):
            make_session(images, falloff=1.2)

    def test_missing_preset_keeps_geometry(self, images):
        session = make_session(images, presets={}, hotspot_count=2)
        assert [(h.x, h.y, h.r) for h in session.hotspots] == [(0, 0, 1), (0, 0, 1)]
        assert all(len(h.points) == 200 for h in session.hotspots)

    def test_seeded_sessions_agree(self, images):
        a = make_session(images, seed=7)
        b = make_session(images, seed=7)
        assert np.array_equal(a.collect_points(), b.collect_points())


class TestNavigation:
    def test_next_portrait_wraps(self, images):
        session = make_session(images)
        session.next_portrait()
        assert session.image_index == 1
        session.next_portrait()
        assert session.image_index == 0

    def test_next_portrait_resets_state(self, images):
        session = make_session(images)
        session.controller.press(50, 50)
        session.next_portrait()

        (h,) = session.hotspots
        assert (h.x, h.y, h.r) == (20, 20, 10)
        assert session.background[:, 0].max() < 60
        assert session.background[:, 1].max() < 40
        assert session.controller.active is None
        assert session.controller.mode is ManipMode.NONE

    def test_toggle_debug(self, images):
        session = make_session(images)
        assert session.debug
        assert not session.toggle_debug()
        assert session.toggle_debug()


class TestRenderFrame:
    def test_voronoi_frame(self, images):
        session = make_session(images)
        frame = session.render_frame()

        assert isinstance(frame, Frame)
        assert not frame.failed
        assert len(frame.points) > 0
        assert len(frame.commands) > 0
        assert all(isinstance(c, (FilledPolygon, WeightedPoint)) for c in frame.commands)
        assert any(isinstance(c, FilledPolygon) for c in frame.commands)
        assert any(isinstance(c, WeightedPoint) for c in frame.commands)

    def test_points_belong_to_hotspots(self, images):
        session = make_session(images)
        (h,) = session.hotspots
        for p in session.render_frame().points:
            assert np.hypot(p.x - h.x, p.y - h.y) < h.r

    def test_bbox_is_inset(self, images):
        builder = FakeBuilder()
        session = make_session(images, builder=builder)
        session.render_frame()
        bbox = builder.calls[-1][1]
        assert (bbox.left, bbox.right, bbox.top, bbox.bottom) == (1, 99, 1, 99)

    def test_hotspot_on_image_edge(self, images):
        session = make_session(images, presets={"gradient.png": [[100.5, 50, 1.2]]})
        frame = session.render_frame()
        assert not frame.failed
        assert len(frame.points) > 0
        assert len(frame.cells) > 0

    def test_failed_build_keeps_previous_frame(self, images):
        builder = FakeBuilder()
        session = make_session(images, builder=builder)
        good = session.render_frame()
        geometry = [(h.x, h.y, h.r) for h in session.hotspots]
        points = [h.points.copy() for h in session.hotspots]

        builder.fail = True
        frame = session.render_frame()

        assert frame.failed
        assert frame.commands == good.commands
        assert [(h.x, h.y, h.r) for h in session.hotspots] == geometry
        assert all(np.array_equal(a, h.points) for a, h in zip(points, session.hotspots))

        builder.fail = False
        assert not session.render_frame().failed

    def test_first_frame_failure_is_empty(self, images):
        session = make_session(images, builder=FakeBuilder(fail=True))
        frame = session.render_frame()
        assert frame.failed
        assert frame.commands == []

    def test_drag_changes_next_frame(self, images):
        builder = FakeBuilder()
        session = make_session(images, builder=builder)
        session.controller.press(50, 50)
        session.controller.drag(30, 70)
        session.controller.release()

        frame = session.render_frame()
        for p in frame.points:
            assert np.hypot(p.x - 30, p.y - 70) < 30
