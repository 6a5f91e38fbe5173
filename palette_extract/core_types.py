# palette_extract/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .constants import ALPHA_THRESHOLD, MAX_ITERATIONS, MAX_SAMPLE_SIZE

# Basic aliases

RGBTuple = Tuple[int, int, int]

PixelBuffer = Union[bytes, bytearray, memoryview, NDArray[np.uint8], Sequence[int]]
U8Points = NDArray[np.uint8]  # (N, 3)
Lab = NDArray[np.float64]  # (..., 3) CIE Lab
Lch = NDArray[np.float64]  # (..., 3) L, C, h
OKLab = NDArray[np.float64]  # (..., 3) OKLab

Palette = List[RGBTuple]
FormattedPalette = Union[List[str], List[List[int]]]

# Value objects


@dataclass(frozen=True)
class QuantizeConfig:
    """Implementation constants of the quantization pipeline."""

    alpha_threshold: int = ALPHA_THRESHOLD
    max_samples: int = MAX_SAMPLE_SIZE
    max_iterations: int = MAX_ITERATIONS

    def __post_init__(self) -> None:
        if not 0 <= int(self.alpha_threshold) <= 256:
            raise ValueError(
                f"alpha_threshold must be in [0, 256], got {self.alpha_threshold!r}"
            )
        if int(self.max_samples) < 1:
            raise ValueError(f"max_samples must be >= 1, got {self.max_samples!r}")
        if int(self.max_iterations) < 1:
            raise ValueError(
                f"max_iterations must be >= 1, got {self.max_iterations!r}"
            )


@dataclass(frozen=True)
class PixelData:
    """Decoded image: size plus a flat RGBA byte buffer in row-major order."""

    width: int
    height: int
    pixels: bytes

    @property
    def pixel_count(self) -> int:
        return len(self.pixels) // 4


# Small helpers


def clamp_value(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi]."""
    return lo if value < lo else hi if value > hi else value


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def sanitize_channel(value: Optional[float]) -> float:
    """
    Coerce one channel to a finite float in [0, 255].
    None, NaN, inf and non-numeric values become 0.
    """
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return clamp_value(number, 0.0, 255.0)


def sanitize_rgb(rgb: Optional[Sequence[Optional[float]]]) -> Tuple[float, float, float]:
    """Sanitize the first three channels of rgb; missing channels become 0."""
    values = list(rgb) if rgb is not None else []
    values += [0.0] * (3 - len(values))
    return (
        sanitize_channel(values[0]),
        sanitize_channel(values[1]),
        sanitize_channel(values[2]),
    )


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array row to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


__all__ = [
    # aliases / types
    "RGBTuple",
    "PixelBuffer",
    "U8Points",
    "Lab",
    "Lch",
    "OKLab",
    "Palette",
    "FormattedPalette",
    # value objects
    "QuantizeConfig",
    "PixelData",
    # helpers
    "clamp_value",
    "round_half_up",
    "sanitize_channel",
    "sanitize_rgb",
    "coerce_to_rgb_tuple",
]
