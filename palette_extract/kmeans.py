# palette_extract/kmeans.py
from __future__ import annotations

"""
K-means over RGB points with first-k seeding.

Exports:
  k_means(points, k, max_iterations=10, *, debug=False) -> list[RGBTuple]

Notes:
  - Slot i is seeded from points[i]; slots past len(points) stay absent.
  - Ties go to the lowest centroid index.
  - Centroids are rounded means (halves up); an empty cluster keeps its centroid.
  - Stops early once an iteration leaves every centroid unchanged.
  - Slots that never received a point are dropped from the result, so the
    output never holds more colours than the input has distinct colours.
"""

from typing import List, Sequence, Union

import numpy as np

from .constants import MAX_ITERATIONS
from .core_types import RGBTuple, U8Points, coerce_to_rgb_tuple
from .metrics import squared_distances
from .utils import debug_log, key_value_pairs_to_string


def _as_points(points: Union[U8Points, Sequence[Sequence[int]]]) -> np.ndarray:
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 3)
    if arr.ndim != 2 or arr.shape[1] < 3:
        raise ValueError(f"expected (N, 3) points, got shape {arr.shape}")
    return arr[:, :3]


def k_means(
    points: Union[U8Points, Sequence[Sequence[int]]],
    k: int,
    max_iterations: int = MAX_ITERATIONS,
    *,
    debug: bool = False,
) -> List[RGBTuple]:
    """
    Cluster points into at most k colours.

    Args:
      points        : (N, 3) RGB rows, N >= 1
      k             : requested cluster count, >= 1
      max_iterations: iteration cap, >= 1
      debug         : print per-run convergence details

    Returns:
      Final centroids in slot order as RGB tuples.
    """
    data = _as_points(points)
    if data.shape[0] == 0:
        raise ValueError("k_means needs at least one point")
    if int(k) < 1:
        raise ValueError(f"k must be >= 1, got {k!r}")
    if int(max_iterations) < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations!r}")

    live = min(int(k), data.shape[0])
    centroids = data[:live].copy()
    populated = np.zeros(live, dtype=bool)

    iterations = 0
    converged = False
    for _ in range(int(max_iterations)):
        iterations += 1
        labels = np.argmin(squared_distances(data, centroids), axis=1)
        counts = np.bincount(labels, minlength=live)
        hit = counts > 0
        populated |= hit

        sums = np.stack(
            [np.bincount(labels, weights=data[:, ch], minlength=live) for ch in range(3)],
            axis=1,
        )
        updated = centroids.copy()
        updated[hit] = np.floor(sums[hit] / counts[hit, None] + 0.5)

        if np.array_equal(updated, centroids):
            converged = True
            break
        centroids = updated

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("k-means points", int(data.shape[0])),
                    ("k", int(k)),
                    ("Live slots", live),
                    ("Iterations", iterations),
                    ("Converged", converged),
                    ("Populated", int(populated.sum())),
                ]
            )
        )

    return [coerce_to_rgb_tuple(row) for row in centroids[populated]]


__all__ = ["k_means"]
