"""
Test configuration and fixtures for palette_extract tests.
"""
import io
from typing import Iterable, Sequence, Tuple

import numpy as np
import pytest
from PIL import Image

from palette_extract.core_types import PixelData

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def rgba_buffer(pixels: Iterable[Sequence[int]]) -> bytes:
    """Pack (r, g, b[, a]) rows into a flat RGBA byte buffer; alpha defaults to 255."""
    out = bytearray()
    for px in pixels:
        r, g, b = px[0], px[1], px[2]
        a = px[3] if len(px) > 3 else 255
        out.extend((r, g, b, a))
    return bytes(out)


def hex_to_rgb(text: str) -> Tuple[int, int, int]:
    """Parse a "#rrggbb" string back into an RGB tuple."""
    assert len(text) == 7 and text.startswith("#"), text
    return (int(text[1:3], 16), int(text[3:5], 16), int(text[5:7], 16))


def png_bytes(array: np.ndarray) -> bytes:
    """Encode an (H, W, 3|4) uint8 array as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(array).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_buffer():
    return rgba_buffer


@pytest.fixture
def rng():
    """Seeded generator for reproducible sampling."""
    return np.random.default_rng(1234)


@pytest.fixture
def two_tone_png():
    """16x8 opaque PNG with alternating red and blue columns."""
    img = np.zeros((8, 16, 3), dtype=np.uint8)
    img[:, ::2] = RED
    img[:, 1::2] = BLUE
    return png_bytes(img)


@pytest.fixture
def static_source():
    """Pixel source stub returning fixed pixels and recording every call."""

    class _Source:
        def __init__(self):
            self.calls = []
            self.pixels = rgba_buffer([RED, GREEN, (0, 0, 255, 0), RED])

        def __call__(self, image):
            self.calls.append(image)
            return PixelData(width=2, height=2, pixels=self.pixels)

    return _Source()
