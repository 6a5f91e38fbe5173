# palette_extract/metrics.py
from __future__ import annotations

"""
Distance metrics over RGB vectors.

Only the first three components take part; a fourth (alpha) component is
ignored and a missing component counts as 0.
"""

import math
from typing import Optional, Sequence

import numpy as np


def _component(vec: Sequence[float], idx: int) -> float:
    if idx >= len(vec) or vec[idx] is None:
        return 0.0
    return float(vec[idx])


def squared_distance(
    a: Optional[Sequence[float]], b: Optional[Sequence[float]]
) -> float:
    """
    Sum of squared component differences over 3 components.
    Returns inf when either side is None so an absent centroid never wins.
    """
    if a is None or b is None:
        return math.inf
    total = 0.0
    for idx in range(3):
        d = _component(a, idx) - _component(b, idx)
        total += d * d
    return total


def distance(a: Optional[Sequence[float]], b: Optional[Sequence[float]]) -> float:
    """Euclidean distance over the RGB components. Never raises on short input."""
    return math.sqrt(
        squared_distance(() if a is None else a, () if b is None else b)
    )


def squared_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Pairwise squared distances, points (N, >=3) vs centroids (K, >=3) -> (N, K).
    Vectorised form of squared_distance for the clustering loop.

    Expanded as |p|^2 - 2 p.c + |c|^2 so memory stays at (N, K); exact for
    integer-valued RGB, which keeps argmin ties stable.
    """
    p = np.asarray(points, dtype=np.float64)[:, :3]
    c = np.asarray(centroids, dtype=np.float64)[:, :3]
    p_sq = np.einsum("ij,ij->i", p, p)
    c_sq = np.einsum("ij,ij->i", c, c)
    d2 = p_sq[:, None] - 2.0 * (p @ c.T) + c_sq[None, :]
    return np.maximum(d2, 0.0)


__all__ = ["squared_distance", "distance", "squared_distances"]
