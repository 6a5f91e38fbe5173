# palette_extract/extract.py
from __future__ import annotations

"""
Palette extraction entry points: pixel source -> quantize -> format.

Exports:
  extract_colours(image, max_colours, fmt="hex", distance_threshold=10.0, ...)
  extract_colours_async(...)  # decodes in a worker thread, then runs the core
  validate_max_colours(value) -> int
"""

import asyncio
import math
import numbers
from typing import Any, Callable, Optional

from .constants import DEFAULT_DISTANCE_THRESHOLD, DEFAULT_FORMAT
from .core_types import FormattedPalette, PixelData, QuantizeConfig
from .format import check_format, format_colours
from .image_io import load_pixel_data
from .quantize import quantize
from .sampler import RandomSource
from .utils import debug_log, key_value_pairs_to_string

PixelSource = Callable[[Any], PixelData]


def validate_max_colours(value: Any) -> int:
    """Return value as int if it is a positive integer; bools and floats are rejected."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(
            f"max_colours must be a positive integer greater than 0, got {value!r}"
        )
    if int(value) <= 0:
        raise ValueError(
            f"max_colours must be a positive integer greater than 0, got {value!r}"
        )
    return int(value)


def _validate_distance(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"distance_threshold must be a number, got {value!r}")
    threshold = float(value)
    if not math.isfinite(threshold) or threshold < 0.0:
        raise ValueError(
            f"distance_threshold must be a finite number >= 0, got {value!r}"
        )
    return threshold


def _validate(max_colours: Any, fmt: str, distance_threshold: Any) -> tuple[int, float]:
    k = validate_max_colours(max_colours)
    check_format(fmt)
    return k, _validate_distance(distance_threshold)


def _run_core(
    pixel_data: PixelData,
    k: int,
    fmt: str,
    threshold: float,
    config: Optional[QuantizeConfig],
    rng: RandomSource,
    debug: bool,
) -> FormattedPalette:
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Decoded", f"{pixel_data.width}x{pixel_data.height}"),
                    ("Pixels", pixel_data.pixel_count),
                    ("Colours", k),
                    ("Format", fmt),
                    ("Distance", threshold),
                ]
            )
        )
    palette = quantize(
        pixel_data.pixels, k, threshold, config=config, rng=rng, debug=debug
    )
    return format_colours(palette, fmt)


def extract_colours(
    image: Any,
    max_colours: int,
    fmt: str = DEFAULT_FORMAT,
    distance_threshold: float = DEFAULT_DISTANCE_THRESHOLD,
    *,
    pixel_source: PixelSource = load_pixel_data,
    config: Optional[QuantizeConfig] = None,
    rng: RandomSource = None,
    debug: bool = False,
) -> FormattedPalette:
    """
    Extract the dominant colours of an image.

    Arguments are validated before the pixel source is touched. Errors raised
    by the pixel source propagate unchanged.

    Returns:
      fmt == "rgb": [[r, g, b], ...]; otherwise a list of strings.
    """
    k, threshold = _validate(max_colours, fmt, distance_threshold)
    pixel_data = pixel_source(image)
    return _run_core(pixel_data, k, fmt, threshold, config, rng, debug)


async def extract_colours_async(
    image: Any,
    max_colours: int,
    fmt: str = DEFAULT_FORMAT,
    distance_threshold: float = DEFAULT_DISTANCE_THRESHOLD,
    *,
    pixel_source: PixelSource = load_pixel_data,
    config: Optional[QuantizeConfig] = None,
    rng: RandomSource = None,
    debug: bool = False,
) -> FormattedPalette:
    """Async form of extract_colours; decoding runs in a worker thread."""
    k, threshold = _validate(max_colours, fmt, distance_threshold)
    pixel_data = await asyncio.to_thread(pixel_source, image)
    return _run_core(pixel_data, k, fmt, threshold, config, rng, debug)


__all__ = ["extract_colours", "extract_colours_async", "validate_max_colours"]
