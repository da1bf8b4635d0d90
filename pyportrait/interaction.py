"""
Pointer-driven moving and scaling of hotspots.
"""

from __future__ import annotations

from enum import Enum
import logging
from typing import Sequence

import numpy as np

from pyportrait import config
from pyportrait.classifier import closest_hotspot
from pyportrait.hotspot import Hotspot

logger = logging.getLogger(__name__)


class ManipMode(Enum):
    NONE = -1
    MOVE = 0
    SCALE = 1


class HotspotController:
    """
    Move or scale one hotspot at a time with a pointer.

    While no drag is running, :meth:`hover` picks the hotspot under the
    pointer: its inner disk (up to ``r - ring_thickness/2``) moves it, the
    ring around its edge scales it. A drag then applies to that hotspot
    until :meth:`release`.

    Parameters
    ----------
    hotspots : sequence of Hotspot
        Hotspots owned by the session; mutated in place.
    ring_thickness : float, optional
        Width of the scaling ring (default: config.RING_THICKNESS).
    spawn_count : int, optional
        Points drawn when a hotspot resamples (default: config.SPAWN_COUNT).
    resample_on_drag : bool, optional
        If True (default), resample after every drag step. If False,
        resample once when the drag ends.
    rng : numpy.random.Generator, optional
        Random source for resampling.

    Attributes
    ----------
    active : int or None
        Index of the hotspot under manipulation.
    mode : ManipMode
        What a drag does to the active hotspot.
    dragging : bool
        Whether a drag is in progress.
    """

    def __init__(self,
                 hotspots: Sequence[Hotspot],
                 ring_thickness: float = config.RING_THICKNESS,
                 spawn_count: int = config.SPAWN_COUNT,
                 resample_on_drag: bool = True,
                 rng: np.random.Generator | None = None,
                 ) -> None:
        self.hotspots = hotspots
        self.ring_thickness = ring_thickness
        self.spawn_count = spawn_count
        self.resample_on_drag = resample_on_drag
        self.rng = rng

        self.active = None
        self.mode = ManipMode.NONE
        self.dragging = False
        self._pending_resample = False

    @property
    def active_hotspot(self) -> Hotspot | None:
        if self.active is None:
            return None
        return self.hotspots[self.active]

    def reset(self) -> None:
        """Forget the active hotspot and any running drag."""
        self.active = None
        self.mode = ManipMode.NONE
        self.dragging = False
        self._pending_resample = False

    def hover(self, x: float, y: float) -> ManipMode:
        """Select the hotspot and mode under the pointer (ignored while dragging)."""
        if self.dragging:
            return self.mode

        self.active = None
        self.mode = ManipMode.NONE

        index, d = closest_hotspot(x, y, self.hotspots)
        if index is None:
            return self.mode

        h = self.hotspots[index]
        half = self.ring_thickness * 0.5
        if d < h.r - half:
            self.mode = ManipMode.MOVE
            self.active = index
        elif d < h.r + half:
            self.mode = ManipMode.SCALE
            self.active = index

        return self.mode

    def press(self, x: float, y: float) -> bool:
        """Start a drag at (x, y). Returns False if no hotspot is there."""
        self.hover(x, y)
        self.dragging = self.active is not None
        if self.dragging:
            logger.debug(f"Start {self.mode.name} of hotspot {self.active}")
        return self.dragging

    def drag(self, x: float, y: float) -> bool:
        """
        Apply a drag step to the active hotspot.

        A move snaps the center to the nearest pixel. A scale sets the
        radius to the pointer distance from the center.

        Returns
        -------
        bool
            True if a hotspot was changed.
        """
        h = self.active_hotspot
        if not self.dragging or h is None:
            return False

        if self.mode is ManipMode.MOVE:
            # centers stay on the pixel grid
            h.set_geometry(round(x), round(y), h.r)
        else:
            h.set_geometry(h.x, h.y, h.distance_to(x, y))

        if self.resample_on_drag:
            h.resample(self.spawn_count, self.rng)
        else:
            self._pending_resample = True
        return True

    def release(self) -> None:
        """End the drag, resampling the hotspot if that was deferred."""
        h = self.active_hotspot
        if self._pending_resample and h is not None:
            h.resample(self.spawn_count, self.rng)
        if self.dragging:
            logger.debug(f"Released hotspot {self.active}: {h}")
        self.dragging = False
        self._pending_resample = False
