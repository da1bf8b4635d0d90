"""
pyportrait - Voronoi portraits with movable level-of-detail hotspots.

Portraits are rendered as filled Voronoi cells close to hotspot centers
and as fading stipple points towards hotspot edges.
"""

from .hotspot import Hotspot
from .image import PortraitImage
from .sampling import generate_background_points, combine_points
from .classifier import ClassifiedPoint, classify_points, closest_hotspot
from .diagram import (
    BoundingBox,
    Cell,
    DiagramAdapter,
    DiagramBuildError,
    VoronoiBuilder,
)
from .render import (
    RenderMode,
    FilledPolygon,
    WeightedPoint,
    decide_render_mode,
    stipple_weight,
    render_cells,
)
from .interaction import HotspotController, ManipMode
from .presets import DEFAULT_PRESETS, load_presets
from .session import Frame, PortraitSession
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "Hotspot",
    "PortraitImage",
    "generate_background_points",
    "combine_points",
    "ClassifiedPoint",
    "classify_points",
    "closest_hotspot",
    "BoundingBox",
    "Cell",
    "DiagramAdapter",
    "DiagramBuildError",
    "VoronoiBuilder",
    "RenderMode",
    "FilledPolygon",
    "WeightedPoint",
    "decide_render_mode",
    "stipple_weight",
    "render_cells",
    # Interaction and session state
    "HotspotController",
    "ManipMode",
    "DEFAULT_PRESETS",
    "load_presets",
    "Frame",
    "PortraitSession",
    "setup_logging",
]
