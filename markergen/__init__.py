"""
Fiducial Marker Generator

Synthesizes square black/white tracking markers from an integer seed,
upscales them without blurring the edges, and optionally stamps a
templated label into the top border.
"""

__version__ = "1.0.0"

from .modules.pipeline import MAX_SIZE, MarkerData, generate_marker
from .modules.profiles import MarkerKind, MarkerProfile
from .modules.seed_source import next_seed

__all__ = [
    "MAX_SIZE",
    "MarkerData",
    "MarkerKind",
    "MarkerProfile",
    "generate_marker",
    "next_seed",
]
