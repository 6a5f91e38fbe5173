# palette_extract/similarity.py
from __future__ import annotations

"""
Drop colours that sit too close to one already kept.
"""

from typing import Iterable, List, Sequence

from .constants import DEFAULT_DISTANCE_THRESHOLD
from .core_types import RGBTuple, coerce_to_rgb_tuple
from .metrics import distance


def filter_similar_colours(
    colours: Iterable[Sequence[int]],
    threshold: float = DEFAULT_DISTANCE_THRESHOLD,
) -> List[RGBTuple]:
    """
    Walk colours in order and keep one only if its distance to every kept
    colour is >= threshold. The first colour of a similar group wins.
    """
    kept: List[RGBTuple] = []
    for colour in colours:
        candidate = coerce_to_rgb_tuple(colour)
        if all(distance(candidate, other) >= threshold for other in kept):
            kept.append(candidate)
    return kept


__all__ = ["filter_similar_colours"]
