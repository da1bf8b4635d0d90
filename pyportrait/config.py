"""
Default parameters for the portrait pipeline.

Every tunable of the sampling, classification and rendering steps has its
default here, so that sessions, viewers and scripts agree on the same values.

Exports:
    SPAWN_COUNT (int): Points scattered per hotspot and across the background.
    HOTSPOT_COUNT (int): Number of hotspots created per session.
    FALLOFF (float): Fraction of a hotspot radius where filled cells give way
        to stipple points.
    RING_THICKNESS (float): Width of the grab ring used to scale a hotspot.
"""

SPAWN_COUNT: int = 1000
HOTSPOT_COUNT: int = 4
FALLOFF: float = 0.6  # 0 - 1.0
RING_THICKNESS: float = 20

# Stroke weight of a stipple point right at the falloff boundary.
MAX_STIPPLE_WEIGHT: float = 10

# Voronoi cells are clipped to the image rectangle shrunk by this many pixels.
BBOX_INSET: int = 1

# RGBA, 0-255
OUTLINE_COLOR: tuple = (0, 0, 0, 25)
OUTLINE_WEIGHT: float = 0.5

TOOLTIP: str = "\n".join([
    "Press space to change to the next image.",
    "Press any other key to toggle the hotspots.",
    "Click and drag hotspots to move or scale them.",
])
