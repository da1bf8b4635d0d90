#!/usr/bin/env python
"""
Voronoi Portrait Example

Opens one or more portraits in the interactive viewer, or renders the
first one to a file when an output path is given with -o.

    python sandbox/example_portrait.py walter.jpg clint.jpg snake.jpg
    python sandbox/example_portrait.py walter.jpg -o img/walter_voronoi.png
"""

import argparse
import logging

from pyportrait import DEFAULT_PRESETS, PortraitImage, PortraitSession, load_presets, setup_logging
from pyportrait.plotting import render_to_file
from pyportrait.viewer import PortraitViewer

parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
parser.add_argument('images', nargs='+', help='portrait image files')
parser.add_argument('-o', '--output', default=None, help='save a single frame instead of opening the viewer')
parser.add_argument('-p', '--presets', default=None, help='JSON file with hotspot presets per image name')
parser.add_argument('--falloff', type=float, default=0.6)
parser.add_argument('--seed', type=int, default=None)
parser.add_argument('-v', '--verbose', action='store_true')
args = parser.parse_args()

setup_logging(logging.DEBUG if args.verbose else logging.INFO)

presets = dict(DEFAULT_PRESETS)
if args.presets is not None:
    presets.update(load_presets(args.presets))

session = PortraitSession(
    [PortraitImage.from_file(path) for path in args.images],
    presets=presets,
    falloff=args.falloff,
    seed=args.seed,
)

if args.output is not None:
    render_to_file(session, args.output, dpi=150, facecolor='k')
    print(f"Saved: {args.output}")
else:
    viewer = PortraitViewer(session)
    viewer.show()
