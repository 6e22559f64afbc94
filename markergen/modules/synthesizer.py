"""
Base marker synthesis: a black frame around a seeded black/white pattern.
"""

import logging
from typing import Union

import numpy as np

from .prng import SubtractiveRandom
from .profiles import MarkerKind, MarkerProfile

logger = logging.getLogger("markergen.synthesizer")

BLACK = 0
WHITE = 255


def draw_border(image: np.ndarray, thickness: int) -> None:
    """Paint a black frame of ``thickness`` pixels around ``image`` in place."""
    if thickness <= 0:
        return

    image[:thickness, :] = BLACK
    image[-thickness:, :] = BLACK
    image[:, :thickness] = BLACK
    image[:, -thickness:] = BLACK


def pattern_bits(seed: int, count: int) -> np.ndarray:
    """Draw ``count`` bits from the generator seeded with ``seed``."""
    rng = SubtractiveRandom(seed)
    return np.fromiter((rng.next_bit() for _ in range(count)), dtype=np.uint8, count=count)


def synthesize(seed: int, profile: Union[MarkerProfile, MarkerKind]) -> np.ndarray:
    """
    Generate the low-resolution marker for ``seed``.

    The interior is filled column by column (x outer, y inner), one generator
    bit per pixel; a set bit is black. The result should be scaled up with
    ``resize_nearest`` before use.

    Returns:
        RGB uint8 array of shape (base_size, base_size, 3)
    """
    if isinstance(profile, MarkerKind):
        profile = profile.profile

    size = profile.base_size
    image = np.full((size, size, 3), WHITE, dtype=np.uint8)
    draw_border(image, profile.border_thickness)

    start, end = profile.pattern_start, profile.pattern_end
    side = end - start
    if side <= 0:
        logger.debug(f"Profile {profile} leaves no room for a pattern")
        return image

    # Bits arrive column-major, so they fill [x, y] and get transposed into [row, col].
    bits = pattern_bits(seed, side * side).reshape(side, side).T
    image[start:end, start:end] = np.where(bits[..., None] == 1, BLACK, WHITE)

    return image
