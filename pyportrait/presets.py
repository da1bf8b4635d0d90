"""
Preset hotspot geometry per portrait.

A preset is a list of ``[x, y, r]`` triples, one per hotspot, keyed by the
portrait's image name.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from pyportrait.hotspot import Hotspot

logger = logging.getLogger(__name__)

# Hand-tuned for the bundled portraits.
DEFAULT_PRESETS: dict[str, list[list[float]]] = {
    "walter.jpg": [[365, 230, 210], [300, 130, 150], [175, 315, 200], [500, 340, 170]],
    "clint.jpg": [[440, 230, 220], [280, 215, 150], [315, 340, 150], [115, 170, 120]],
    "snake.jpg": [[660, 240, 240], [360, 120, 150], [230, 65, 200], [485, 250, 185]],
}


def validate_preset(triples: Any) -> list[list[float]]:
    """
    Check a preset and return it as a list of float triples.

    Raises
    ------
    ValueError
        If an entry is not three numbers or has a negative radius.
    """
    if not isinstance(triples, (list, tuple)):
        raise ValueError(f"Preset must be a list of [x, y, r] triples, got {triples!r}")

    checked = []
    for entry in triples:
        if not isinstance(entry, (list, tuple)) or len(entry) != 3:
            raise ValueError(f"Preset entry must be [x, y, r], got {entry!r}")
        if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in entry):
            raise ValueError(f"Preset entry must be numeric, got {entry!r}")
        x, y, r = (float(v) for v in entry)
        if r < 0:
            raise ValueError(f"Preset radius must be non-negative, got {entry!r}")
        checked.append([x, y, r])
    return checked


def load_presets(path: str) -> dict[str, list[list[float]]]:
    """
    Read presets from a JSON file mapping image names to triples.

    Example file::

        {"walter.jpg": [[365, 230, 210], [300, 130, 150]]}
    """
    logger.info(f"Loading hotspot presets from: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Preset file must contain an object, got {type(data).__name__}")

    return {str(name): validate_preset(triples) for name, triples in data.items()}


def apply_preset(hotspots: Sequence[Hotspot], triples: Sequence[Sequence[float]]) -> None:
    """
    Set the geometry of each hotspot from its triple.

    Does not resample. Hotspots without a triple keep their geometry.
    """
    if len(triples) != len(hotspots):
        logger.warning(f"Preset has {len(triples)} entries for {len(hotspots)} hotspots")

    for h, (x, y, r) in zip(hotspots, triples):
        h.set_geometry(x, y, r)
