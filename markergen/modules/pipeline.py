"""
End-to-end marker generation: seed, synthesize, resize, label.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union

import numpy as np

from .label import LabelRenderer, compose_label
from .prng import INT32_MAX, INT32_MIN
from .profiles import MarkerKind
from .resizer import InvalidSizeError, resize_nearest
from .seed_source import next_seed
from .synthesizer import synthesize

logger = logging.getLogger("markergen.pipeline")

MAX_SIZE = 2048
DEFAULT_SIZE = 1024


@dataclass
class MarkerData:
    """A generated marker and the seed that reproduces it."""
    seed: int
    image: np.ndarray
    kind: MarkerKind = MarkerKind.VUFORIA

    @property
    def size(self) -> int:
        return self.image.shape[0]


def clamp_size(size: int, max_size: int = MAX_SIZE) -> int:
    """
    Clamp a requested side length to ``max_size``; reject sizes below one.

    ``max_size`` can only lower the limit below ``MAX_SIZE``, never raise it.
    """
    size = int(size)
    max_size = min(int(max_size), MAX_SIZE)
    if max_size < 1:
        raise InvalidSizeError(f"Maximum marker size must be at least 1, got {max_size}")
    if size < 1:
        raise InvalidSizeError(f"Marker size must be at least 1, got {size}")
    if size > max_size:
        logger.debug(f"Clamping requested size {size} to {max_size}")
        return max_size
    return size


def check_seed(seed: int) -> int:
    """Reject seeds outside the signed 32-bit range."""
    seed = int(seed)
    if not INT32_MIN <= seed <= INT32_MAX:
        raise ValueError(f"Seed must be a signed 32-bit integer, got {seed}")
    return seed


def system_parameters(seed: int) -> Dict[str, object]:
    """Values available to label templates."""
    return {"id": seed}


def generate_marker(
    seed: Optional[int] = None,
    size: int = DEFAULT_SIZE,
    label: Optional[str] = None,
    kind: Union[MarkerKind, str, int] = MarkerKind.VUFORIA,
    max_size: int = MAX_SIZE,
    renderer: Optional[LabelRenderer] = None
) -> MarkerData:
    """
    Generate a marker image.

    Args:
        seed: Pattern seed; a fresh one is drawn when omitted
        size: Output side length, clamped to ``max_size``
        label: Optional label template such as ``"ID: {id}"``
        kind: Marker family
        max_size: Largest allowed output side
        renderer: Label renderer; a default one is used when omitted

    Returns:
        MarkerData with the seed actually used and the RGB image
    """
    kind = MarkerKind.parse(kind)
    size = clamp_size(size, max_size)

    if seed is None:
        seed = next_seed()
    seed = check_seed(seed)

    base = synthesize(seed, kind.profile)
    image = resize_nearest(base, size)
    compose_label(image, label, system_parameters(seed), renderer)

    logger.debug(f"Generated {kind.name} marker {seed} at {size}px")

    return MarkerData(seed=seed, image=image, kind=kind)
