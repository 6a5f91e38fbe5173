"""
Integration tests for the quantization pipeline (sample -> k-means -> filter).
"""

import itertools

import numpy as np
import pytest

from palette_extract.core_types import QuantizeConfig
from palette_extract.metrics import distance
from palette_extract.quantize import quantize

from conftest import BLUE, GREEN, RED


class TestQuantize:
    def test_transparent_pixels_are_excluded(self, make_buffer):
        buf = make_buffer([RED, GREEN, (0, 0, 255, 0), RED])
        assert set(quantize(buf, 2, 5)) == {RED, GREEN}

    @pytest.mark.parametrize("k", [1, 3, 16])
    def test_all_transparent_gives_empty_palette(self, make_buffer, k):
        buf = make_buffer([(255, 255, 255, 0)] * 20)
        assert quantize(buf, k) == []

    def test_empty_buffer(self):
        assert quantize(b"", 4) == []

    def test_single_visible_pixel(self, make_buffer):
        buf = make_buffer([(10, 20, 30, 0), (200, 100, 50, 255)])
        assert quantize(buf, 5) == [(200, 100, 50)]

    def test_similar_centroids_are_merged(self, make_buffer):
        buf = make_buffer([(0, 0, 0), (3, 0, 0), (200, 0, 0)])
        assert quantize(buf, 3, 10) == [(0, 0, 0), (200, 0, 0)]
        assert quantize(buf, 3, 0) == [(0, 0, 0), (3, 0, 0), (200, 0, 0)]

    def test_alpha_threshold_from_config(self, make_buffer):
        buf = make_buffer([RED, GREEN, (0, 0, 255, 0)])
        cfg = QuantizeConfig(alpha_threshold=0)
        assert quantize(buf, 3, config=cfg) == [RED, GREEN, BLUE]

    def test_palette_respects_threshold(self, make_buffer):
        rng = np.random.default_rng(21)
        pixels = [tuple(p) for p in rng.integers(0, 256, size=(1500, 3)).tolist()]
        palette = quantize(make_buffer(pixels), 8, 40, rng=1)
        assert 1 <= len(palette) <= 8
        for a, b in itertools.combinations(palette, 2):
            assert distance(a, b) >= 40

    def test_sampling_is_reproducible_with_seed(self, make_buffer):
        rng = np.random.default_rng(22)
        pixels = [tuple(p) for p in rng.integers(0, 256, size=(3000, 3)).tolist()]
        buf = make_buffer(pixels)
        cfg = QuantizeConfig(max_samples=500)
        assert quantize(buf, 4, config=cfg, rng=7) == quantize(buf, 4, config=cfg, rng=7)

    def test_large_image_under_raised_cap(self, make_buffer):
        buf = make_buffer([RED, BLUE] * 3000)
        cfg = QuantizeConfig(max_samples=6000)
        assert quantize(buf, 2, config=cfg) == [RED, BLUE]

    def test_sampled_palette_uses_sampled_colours(self, make_buffer):
        buf = make_buffer([RED] * 3000)
        assert quantize(buf, 3, rng=3) == [RED]

    def test_debug_output(self, make_buffer, capsys):
        quantize(make_buffer([RED, GREEN]), 2, debug=True)
        out = capsys.readouterr().out
        assert "[debug]" in out
        assert "Visible: 2" in out


class TestQuantizeConfig:
    def test_defaults(self):
        cfg = QuantizeConfig()
        assert (cfg.alpha_threshold, cfg.max_samples, cfg.max_iterations) == (16, 2000, 10)

    @pytest.mark.parametrize(
        "kwargs",
        [{"alpha_threshold": -1}, {"max_samples": 0}, {"max_iterations": 0}],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            QuantizeConfig(**kwargs)
