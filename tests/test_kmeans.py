"""
Unit tests for the k-means clusterer.
"""

import numpy as np
import pytest

from palette_extract.kmeans import k_means

from conftest import BLUE, GREEN, RED


class TestKMeansBasics:
    def test_two_clusters(self):
        assert k_means([RED, GREEN, RED], 2) == [RED, GREEN]

    def test_single_point(self):
        assert k_means([(12, 34, 56)], 4) == [(12, 34, 56)]

    def test_accepts_uint8_array(self):
        points = np.array([RED, BLUE], dtype=np.uint8)
        assert k_means(points, 2) == [RED, BLUE]

    def test_means_round_half_up(self):
        assert k_means([(0, 0, 0), (1, 1, 1)], 1) == [(1, 1, 1)]

    def test_ties_go_to_lowest_index(self):
        points = [(0, 0, 0), (10, 0, 0), (5, 0, 0)]
        assert k_means(points, 2) == [(3, 0, 0), (10, 0, 0)]

    def test_iteration_cap(self):
        points = [(0, 0, 0), (100, 0, 0), (10, 0, 0), (90, 0, 0)]
        assert k_means(points, 2, max_iterations=1) == [(5, 0, 0), (95, 0, 0)]


class TestKMeansIterations:
    def test_emptied_cluster_keeps_centroid(self):
        # slot 2 loses all its points after the first update
        points = [(8, 15, 4), (6, 17, 6), (3, 5, 4), (12, 7, 5), (19, 2, 11)]
        assert k_means(points, 3) == [(10, 11, 5), (7, 16, 5), (11, 5, 7)]

    def test_stops_once_converged(self, capsys):
        points = [(0, 0, 0), (100, 0, 0), (10, 0, 0), (90, 0, 0)]
        assert k_means(points, 2, debug=True) == [(5, 0, 0), (95, 0, 0)]
        out = capsys.readouterr().out
        assert "Iterations: 2" in out
        assert "Converged: on" in out

    def test_debug_silent_by_default(self, capsys):
        k_means([RED, GREEN], 2)
        assert capsys.readouterr().out == ""


class TestKMeansNeverFabricates:
    def test_more_clusters_than_points(self):
        out = k_means([RED, GREEN], 5)
        assert out == [RED, GREEN]

    def test_duplicate_seeds_are_dropped(self):
        out = k_means([RED, RED, GREEN, GREEN], 4)
        assert out == [RED, GREEN]

    def test_output_bounded_by_distinct_inputs(self):
        rng = np.random.default_rng(5)
        palette = np.array([RED, GREEN, BLUE], dtype=np.uint8)
        points = palette[rng.integers(0, 3, size=60)]
        out = k_means(points, 10)
        assert len(out) <= 3
        assert set(out) <= {RED, GREEN, BLUE}

    def test_components_in_range(self):
        points = np.random.default_rng(6).integers(0, 256, size=(500, 3))
        for colour in k_means(points, 6):
            assert all(isinstance(c, int) and 0 <= c <= 255 for c in colour)

    def test_deterministic_for_same_order(self):
        points = np.random.default_rng(8).integers(0, 256, size=(300, 3))
        assert k_means(points, 5) == k_means(points.copy(), 5)


class TestKMeansErrors:
    def test_empty_points(self):
        with pytest.raises(ValueError):
            k_means([], 3)

    def test_non_positive_k(self):
        with pytest.raises(ValueError):
            k_means([RED], 0)

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            k_means([1, 2, 3], 1)
