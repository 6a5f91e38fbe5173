# palette_extract/constants.py
"""
Global tunables used across the project.

- Quantization defaults (alpha threshold, sample cap, iteration cap)
- Similarity thresholds and output formats
- Colour-space constants (D65 white, XYZ and OKLab matrices)
"""
from __future__ import annotations

from typing import Tuple

# ===================
# Quantization
# ===================
ALPHA_THRESHOLD: int = 16
MAX_SAMPLE_SIZE: int = 2000
MAX_ITERATIONS: int = 10

# Pipeline default. The formatting-only variant used a looser 35.
DEFAULT_DISTANCE_THRESHOLD: float = 10.0
FORMAT_DISTANCE_THRESHOLD: float = 35.0

# ===================
# Output formats
# ===================
DEFAULT_FORMAT: str = "hex"
SUPPORTED_FORMATS: Tuple[str, ...] = ("rgb", "hex", "hsl", "oklch")

# ===================
# Decoding
# ===================
MAX_DECODE_SIZE: int = 512
IMAGE_EXTENSIONS: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp")

# ===================
# Colour science
# ===================
SRGB_LINEAR_THRESHOLD: float = 0.04045

# Reference white (D65)
D65_WHITE: Tuple[float, float, float] = (0.95047, 1.00000, 1.08883)

# Lab f(t) knee and the linear segment slope used below it
LAB_EPSILON: float = 0.008856
LAB_KAPPA: float = 903.3

# Linear sRGB -> XYZ (D65)
RGB_TO_XYZ: Tuple[Tuple[float, float, float], ...] = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)

# Linear sRGB -> LMS
RGB_TO_LMS: Tuple[Tuple[float, float, float], ...] = (
    (0.4122214708, 0.5363325363, 0.0514459929),
    (0.2119034982, 0.6806995451, 0.1073969566),
    (0.0883024619, 0.2817188376, 0.6299787005),
)

# Non-linear LMS -> OKLab
LMS_TO_OKLAB: Tuple[Tuple[float, float, float], ...] = (
    (0.2104542553, 0.7936177850, -0.0040720468),
    (1.9779984951, -2.4285922050, 0.4505937099),
    (0.0259040371, 0.7827717662, -0.8086757660),
)
