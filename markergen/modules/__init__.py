"""
Marker generation pipeline modules.
"""

from .label import LabelRenderer, compose_label, expand_template
from .pipeline import MAX_SIZE, MarkerData, check_seed, clamp_size, generate_marker
from .prng import SubtractiveRandom
from .profiles import MarkerKind, MarkerProfile
from .resizer import InvalidSizeError, resize_nearest
from .seed_source import EntropyExhaustedError, SeedSource, next_seed
from .synthesizer import synthesize

__all__ = [
    "LabelRenderer",
    "compose_label",
    "expand_template",
    "MAX_SIZE",
    "MarkerData",
    "check_seed",
    "clamp_size",
    "generate_marker",
    "SubtractiveRandom",
    "MarkerKind",
    "MarkerProfile",
    "InvalidSizeError",
    "resize_nearest",
    "EntropyExhaustedError",
    "SeedSource",
    "next_seed",
    "synthesize",
]
