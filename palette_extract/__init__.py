# palette_extract/__init__.py
"""
palette_extract package.

Purpose:
  Extract a small palette of dominant colours from an image and convert colours
  between RGB, HEX, HSL, CIE Lab and OKLCH. See extract_palette.py for the CLI.

Public API:
  extract_colours      : image -> formatted palette (sync).
  extract_colours_async: same, decoding in a worker thread.
  quantize             : RGBA buffer -> list of RGB tuples.
  format_colours       : RGB tuples -> 'rgb' | 'hex' | 'hsl' | 'oklch'.
  load_pixel_data      : default pixel source (Pillow).
  colour_convert       : colour space transforms (rgb_to_hex, rgb_to_oklch, ...).
  core_types           : shared aliases and value objects (QuantizeConfig, PixelData).

Quick start:
  from palette_extract import extract_colours
  extract_colours("photo.jpg", 5, "oklch")
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_convert
from . import core_types
from . import metrics
from . import utils

from .colour_convert import (  # noqa: E402,F401
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_oklch,
    rgb_to_oklch_approx,
)
from .core_types import PixelData, QuantizeConfig  # noqa: E402,F401
from .extract import extract_colours, extract_colours_async  # noqa: E402,F401
from .format import format_colours  # noqa: E402,F401
from .image_io import load_pixel_data  # noqa: E402,F401
from .kmeans import k_means  # noqa: E402,F401
from .metrics import distance, squared_distance  # noqa: E402,F401
from .quantize import quantize  # noqa: E402,F401
from .similarity import filter_similar_colours  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_convert",
    "core_types",
    "metrics",
    "utils",
    "rgb_to_hex",
    "rgb_to_hsl",
    "rgb_to_oklch",
    "rgb_to_oklch_approx",
    "PixelData",
    "QuantizeConfig",
    "extract_colours",
    "extract_colours_async",
    "format_colours",
    "load_pixel_data",
    "k_means",
    "distance",
    "squared_distance",
    "quantize",
    "filter_similar_colours",
]
