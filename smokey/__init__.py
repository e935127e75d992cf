"""Smokey: drifting smoke particles branching off a figure."""

from .noise import RandomSource
from .paths import Figure, Location, Path, PathSegment, Step, walk_to_segment
from .smoke import AlphaDirection, InvalidArgument, Smoke, SmokeParticle

__all__ = [
    "AlphaDirection",
    "Figure",
    "InvalidArgument",
    "Location",
    "Path",
    "PathSegment",
    "RandomSource",
    "Smoke",
    "SmokeParticle",
    "Step",
    "walk_to_segment",
]
