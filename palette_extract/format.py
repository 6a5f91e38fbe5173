# palette_extract/format.py
from __future__ import annotations

"""
Output formatting for palettes.

Exports:
  format_colours(colours, fmt) -> list[str] | list[list[int]]
  check_format(fmt) -> str
"""

from typing import Callable, Dict, Iterable, List, Sequence

from .constants import SUPPORTED_FORMATS
from .core_types import FormattedPalette, coerce_to_rgb_tuple
from .colour_convert import rgb_to_hex, rgb_to_hsl, rgb_to_oklch

_STRING_FORMATTERS: Dict[str, Callable[[Sequence[int]], str]] = {
    "hex": rgb_to_hex,
    "hsl": rgb_to_hsl,
    "oklch": rgb_to_oklch,
}


def check_format(fmt: str) -> str:
    """Return fmt if supported, else raise ValueError naming it."""
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported colour format: {fmt!r} "
            f"(expected one of {', '.join(SUPPORTED_FORMATS)})"
        )
    return fmt


def format_colours(colours: Iterable[Sequence[int]], fmt: str) -> FormattedPalette:
    """
    Map RGB colours to the requested representation.
      rgb   : [[r, g, b], ...] unchanged values
      hex   : ['#rrggbb', ...]
      hsl   : ['hsl(H, S%, L%)', ...]
      oklch : ['oklch(L C Hdeg)', ...]
    """
    check_format(fmt)
    if fmt == "rgb":
        rgb_rows: List[List[int]] = [list(coerce_to_rgb_tuple(c)) for c in colours]
        return rgb_rows
    convert = _STRING_FORMATTERS[fmt]
    return [convert(c) for c in colours]


__all__ = ["format_colours", "check_format"]
