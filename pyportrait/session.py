"""
Portrait session: the state shared by one viewing session.

The session owns the portraits, the hotspots and the background scatter,
and runs the per-frame pipeline

    background + hotspot points -> classify -> Voronoi -> draw commands
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

import numpy as np

from pyportrait import config
from pyportrait.classifier import ClassifiedPoint, classify_points
from pyportrait.diagram import BoundingBox, Cell, DiagramAdapter, DiagramBuilder, DiagramBuildError
from pyportrait.hotspot import Hotspot
from pyportrait.image import PortraitImage
from pyportrait.interaction import HotspotController
from pyportrait.presets import apply_preset
from pyportrait.render import DrawCommand, check_falloff, render_cells
from pyportrait.sampling import combine_points, generate_background_points

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """Result of one pipeline run."""
    commands: list[DrawCommand] = field(default_factory=list)
    cells: list[Cell] = field(default_factory=list)
    points: list[ClassifiedPoint] = field(default_factory=list)
    failed: bool = False


class PortraitSession:
    """
    Explicit context for rendering a set of portraits.

    Parameters
    ----------
    images : sequence of PortraitImage
        Portraits to cycle through. At least one is required.
    presets : dict, optional
        Hotspot presets keyed by image name (see :mod:`pyportrait.presets`).
    hotspot_count : int, optional
        Number of hotspots (default: config.HOTSPOT_COUNT).
    spawn_count : int, optional
        Points per hotspot and in the background (default: config.SPAWN_COUNT).
    falloff : float, optional
        Filled/stipple boundary as a fraction of the radius (default: config.FALLOFF).
    ring_thickness : float, optional
        Width of the scaling ring (default: config.RING_THICKNESS).
    seed : int, optional
        Seed for all random draws of the session.
    builder : DiagramBuilder, optional
        Diagram service (default: scipy Voronoi).
    resample_on_drag : bool, optional
        Resample on every drag step (default) or once at release.

    Examples
    --------
    >>> session = PortraitSession([PortraitImage.from_file("walter.jpg")],
    ...                           presets=DEFAULT_PRESETS, seed=1)
    >>> frame = session.render_frame()
    """

    def __init__(self,
                 images: Sequence[PortraitImage],
                 presets: dict | None = None,
                 hotspot_count: int = config.HOTSPOT_COUNT,
                 spawn_count: int = config.SPAWN_COUNT,
                 falloff: float = config.FALLOFF,
                 ring_thickness: float = config.RING_THICKNESS,
                 seed: int | None = None,
                 builder: DiagramBuilder | None = None,
                 resample_on_drag: bool = True,
                 ) -> None:
        if len(images) == 0:
            raise ValueError("A session needs at least one image")

        self.images = list(images)
        self.presets = presets if presets is not None else {}
        self.spawn_count = spawn_count
        self.falloff = check_falloff(falloff)
        self.rng = np.random.default_rng(seed)

        self.image_index = 0
        self.debug = True

        self.hotspots = [Hotspot() for i in range(hotspot_count)]
        self.controller = HotspotController(self.hotspots,
                                            ring_thickness = ring_thickness,
                                            spawn_count = spawn_count,
                                            resample_on_drag = resample_on_drag,
                                            rng = self.rng,
                                            )
        self.adapter = DiagramAdapter(builder)
        self.last_frame = Frame()

        self.background = None
        self.select_portrait(0)

    @property
    def image(self) -> PortraitImage:
        return self.images[self.image_index]

    @property
    def bbox(self) -> BoundingBox:
        return BoundingBox.for_image(self.image.width, self.image.height, config.BBOX_INSET)

    def select_portrait(self, index: int) -> None:
        """Switch portraits: new background scatter, hotspots reset to preset."""
        self.image_index = index % len(self.images)
        img = self.image
        logger.info(f"Selected portrait {self.image_index} ({img.name}, {img.width}x{img.height})")

        self.background = generate_background_points(img.width, img.height, self.spawn_count, self.rng)
        self.controller.reset()
        self.init_hotspots()

    def next_portrait(self) -> None:
        self.select_portrait(self.image_index + 1)

    def toggle_debug(self) -> bool:
        self.debug = not self.debug
        return self.debug

    def init_hotspots(self) -> None:
        """Apply the current portrait's preset, then resample every hotspot once."""
        preset = self.presets.get(self.image.name)
        if preset is not None:
            apply_preset(self.hotspots, preset)
        else:
            logger.debug(f"No hotspot preset for {self.image.name}")

        for h in self.hotspots:
            h.resample(self.spawn_count, self.rng)

    def collect_points(self) -> np.ndarray:
        return combine_points(self.background, self.hotspots)

    def render_frame(self, verbose: bool = False) -> Frame:
        """
        Run the pipeline once.

        If the diagram cannot be built, the previous frame is returned
        again (with ``failed`` set) and the hotspots stay untouched.
        """
        points = classify_points(self.collect_points(), self.image, self.hotspots, verbose=verbose)

        try:
            cells = self.adapter.build(points, self.bbox)
        except DiagramBuildError as e:
            logger.warning(f"Diagram build failed, keeping previous frame: {e}")
            last = self.last_frame
            return Frame(commands=last.commands, cells=last.cells, points=last.points, failed=True)

        commands = render_cells(cells, self.hotspots, self.falloff)
        self.last_frame = Frame(commands=commands, cells=cells, points=points)
        return self.last_frame
