"""
Nearest-neighbour upscaling that keeps marker edges hard.
Vectorized with numpy index arrays.
"""

import logging

import numpy as np

logger = logging.getLogger("markergen.resizer")


class InvalidSizeError(ValueError):
    """Requested image side is smaller than one pixel."""


def sample_indices(src_size: int, target_size: int) -> np.ndarray:
    """
    Source index for every destination index along one axis.

    Uses ``round(i * (src - 1) / (target - 1))`` with round-half-to-even.
    A single destination pixel samples source index 0.
    """
    if target_size < 1:
        raise InvalidSizeError(f"Target size must be at least 1, got {target_size}")

    if target_size == 1 or src_size == 1:
        return np.zeros(target_size, dtype=np.intp)

    scale = (src_size - 1) / (target_size - 1)
    indices = np.rint(np.arange(target_size) * scale).astype(np.intp)

    return np.clip(indices, 0, src_size - 1)


def resize_nearest(src: np.ndarray, target_size: int) -> np.ndarray:
    """
    Resize a square image to ``target_size`` x ``target_size``.

    Every output pixel is an exact copy of a source pixel, so no new colours
    are introduced.
    """
    if src.ndim < 2 or src.shape[0] != src.shape[1]:
        raise ValueError(f"Expected a square image, got shape {src.shape}")

    indices = sample_indices(src.shape[0], target_size)
    logger.debug(f"Resizing {src.shape[0]}px -> {target_size}px")

    return np.ascontiguousarray(src[indices[:, None], indices[None, :]])
