# palette_extract/sampler.py
from __future__ import annotations

"""
Pixel sampling ahead of clustering.

Exports:
  as_pixel_array(pixels) -> uint8 [N*4]
  visible_pixels(pixels, alpha_threshold) -> uint8 [M,3]
  sample_pixels(points, max_samples, rng) -> uint8 [<=max_samples,3]
  sample_visible_pixels(pixels, alpha_threshold, max_samples, rng)

Notes:
  A pixel is visible when alpha >= alpha_threshold.
  Sampling only happens above the cap; below it the encounter order is kept.
"""

from typing import Optional, Union

import numpy as np

from .constants import ALPHA_THRESHOLD, MAX_SAMPLE_SIZE
from .core_types import PixelBuffer, U8Points

RandomSource = Union[np.random.Generator, int, None]


def resolve_rng(rng: RandomSource) -> np.random.Generator:
    """Accept a Generator, an int seed, or None (fresh OS entropy)."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def as_pixel_array(pixels: PixelBuffer) -> np.ndarray:
    """
    Flatten a pixel buffer to uint8 [N*4], dropping a trailing partial pixel.
    Never mutates the caller's buffer.
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(pixels, dtype=np.uint8)
    elif isinstance(pixels, np.ndarray) and pixels.dtype == np.uint8:
        flat = pixels.reshape(-1)
    else:
        flat = np.clip(np.asarray(pixels, dtype=np.int64).reshape(-1), 0, 255).astype(
            np.uint8
        )
    usable = (flat.size // 4) * 4
    return flat[:usable]


def visible_pixels(
    pixels: PixelBuffer, alpha_threshold: int = ALPHA_THRESHOLD
) -> U8Points:
    """RGB rows of every pixel with alpha >= alpha_threshold, in buffer order."""
    rgba = as_pixel_array(pixels).reshape(-1, 4)
    keep = rgba[:, 3] >= alpha_threshold
    return np.array(rgba[keep, :3], dtype=np.uint8)


def sample_pixels(
    points: U8Points, max_samples: int = MAX_SAMPLE_SIZE, rng: RandomSource = None
) -> U8Points:
    """
    Cap the working set at max_samples rows.
    Above the cap: Fisher-Yates shuffle then truncate. Otherwise unchanged.
    """
    count = int(points.shape[0])
    if count <= max_samples:
        return points
    order = resolve_rng(rng).permutation(count)
    return points[order[:max_samples]]


def sample_visible_pixels(
    pixels: PixelBuffer,
    alpha_threshold: int = ALPHA_THRESHOLD,
    max_samples: int = MAX_SAMPLE_SIZE,
    rng: RandomSource = None,
) -> U8Points:
    """Alpha-filter then cap. Empty result means nothing was visible."""
    return sample_pixels(visible_pixels(pixels, alpha_threshold), max_samples, rng)


__all__ = [
    "RandomSource",
    "resolve_rng",
    "as_pixel_array",
    "visible_pixels",
    "sample_pixels",
    "sample_visible_pixels",
]
