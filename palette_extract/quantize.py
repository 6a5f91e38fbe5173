# palette_extract/quantize.py
from __future__ import annotations

"""
Quantization pipeline: sample -> k-means -> similarity filter.

Exports:
  quantize(pixels, max_colours, distance_threshold=10.0, *, config=None, rng=None, debug=False)
    -> list[RGBTuple]
"""

import time
from typing import Optional

from .constants import DEFAULT_DISTANCE_THRESHOLD
from .core_types import Palette, PixelBuffer, QuantizeConfig
from .kmeans import k_means
from .sampler import RandomSource, as_pixel_array, sample_pixels, visible_pixels
from .similarity import filter_similar_colours
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string


def quantize(
    pixels: PixelBuffer,
    max_colours: int,
    distance_threshold: float = DEFAULT_DISTANCE_THRESHOLD,
    *,
    config: Optional[QuantizeConfig] = None,
    rng: RandomSource = None,
    debug: bool = False,
) -> Palette:
    """
    Reduce an RGBA buffer to at most max_colours dominant RGB colours.

    Args:
      pixels            : flat RGBA bytes (or uint8 array / int sequence)
      max_colours       : k for the clusterer
      distance_threshold: minimum distance between two kept colours
      config            : alpha threshold, sample cap and iteration cap
      rng               : Generator or int seed for the sampling shuffle
      debug             : print stage counts and timing

    Returns:
      Palette in cluster order; [] when no pixel is visible.
    """
    cfg = config or QuantizeConfig()
    t_start = time.perf_counter()

    flat = as_pixel_array(pixels)
    visible = visible_pixels(flat, cfg.alpha_threshold)
    if visible.shape[0] == 0:
        if debug:
            debug_log("quantize: no visible pixels")
        return []

    sampled = sample_pixels(visible, cfg.max_samples, rng)
    t_sampled = time.perf_counter()

    centroids = k_means(sampled, max_colours, cfg.max_iterations, debug=debug)
    t_clustered = time.perf_counter()

    palette = filter_similar_colours(centroids, distance_threshold)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", flat.size // 4),
                    ("Visible", int(visible.shape[0])),
                    ("Sampled", int(sampled.shape[0])),
                    ("Centroids", len(centroids)),
                    ("Kept", len(palette)),
                    ("Sample", format_seconds_compact(t_sampled - t_start)),
                    ("Cluster", format_seconds_compact(t_clustered - t_sampled)),
                ]
            )
        )
    return palette


__all__ = ["quantize"]
