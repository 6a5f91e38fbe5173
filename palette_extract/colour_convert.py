# palette_extract/colour_convert.py
from __future__ import annotations

"""
Colour conversions (D65).

Vectorised NumPy building blocks, accepting any (..., 3) shape:
  rgb_to_linear(srgb)
  rgb_to_xyz(rgb)
  xyz_to_lab(xyz)
  rgb_to_lab(rgb)
  lab_to_approx_oklch(lab)
  rgb_to_oklab(rgb)
  oklab_to_oklch(oklab)

Single-colour string conversions:
  rgb_to_hex(rgb)          -> '#rrggbb'
  rgb_to_hsl(rgb)          -> 'hsl(H, S%, L%)'
  rgb_to_oklch(rgb)        -> 'oklch(L C Hdeg)' via OKLab (canonical)
  rgb_to_oklch_approx(rgb) -> 'oklch(L C Hdeg)' via CIE Lab (approximate)

The two OKLCH routes do not agree numerically. rgb_to_oklch is the one used
by the 'oklch' output format.
"""

from typing import Optional, Sequence

import numpy as np

from .constants import (
    D65_WHITE,
    LAB_EPSILON,
    LAB_KAPPA,
    LMS_TO_OKLAB,
    RGB_TO_LMS,
    RGB_TO_XYZ,
    SRGB_LINEAR_THRESHOLD,
)
from .core_types import Lab, Lch, OKLab, round_half_up, sanitize_rgb

_RGB_TO_XYZ = np.asarray(RGB_TO_XYZ, dtype=np.float64)
_RGB_TO_LMS = np.asarray(RGB_TO_LMS, dtype=np.float64)
_LMS_TO_OKLAB = np.asarray(LMS_TO_OKLAB, dtype=np.float64)
_WHITE = np.asarray(D65_WHITE, dtype=np.float64)


# sRGB to linear


def rgb_to_linear(srgb: np.ndarray) -> np.ndarray:
    """
    Convert sRGB (non-linear 0..1) to linear RGB (0..1). Vectorised.
    Returns float64 with shape preserved.
    """
    srgb_f = np.asarray(srgb, dtype=np.float64)
    return np.where(
        srgb_f <= SRGB_LINEAR_THRESHOLD,
        srgb_f / 12.92,
        ((srgb_f + 0.055) / 1.055) ** 2.4,
    )


def _linear_rgb(rgb: np.ndarray) -> np.ndarray:
    rgb_f = np.clip(np.nan_to_num(np.asarray(rgb, dtype=np.float64)), 0.0, 255.0)
    return rgb_to_linear(rgb_f / 255.0)


# sRGB to XYZ to Lab


def rgb_to_xyz(rgb: np.ndarray) -> np.ndarray:
    """sRGB [0..255] (..., 3) to CIE XYZ (D65)."""
    return _linear_rgb(rgb) @ _RGB_TO_XYZ.T


def xyz_to_lab(xyz: np.ndarray) -> Lab:
    """
    CIE XYZ to CIE Lab against the D65 reference white.
    f(t) is a cube root above the 0.008856 knee and linear below it.
    """
    scaled = np.asarray(xyz, dtype=np.float64) / _WHITE

    def f(t: np.ndarray) -> np.ndarray:
        return np.where(t > LAB_EPSILON, np.cbrt(t), (LAB_KAPPA * t + 16.0) / 116.0)

    fx, fy, fz = f(scaled[..., 0]), f(scaled[..., 1]), f(scaled[..., 2])
    out = np.empty(scaled.shape, dtype=np.float64)
    out[..., 0] = 116.0 * fy - 16.0
    out[..., 1] = 500.0 * (fx - fy)
    out[..., 2] = 200.0 * (fy - fz)
    return out


def rgb_to_lab(rgb: np.ndarray) -> Lab:
    """sRGB [0..255] to CIE Lab (D65). Preserves shape (..., 3)."""
    return xyz_to_lab(rgb_to_xyz(rgb))


def _polar(l_values: np.ndarray, a: np.ndarray, b: np.ndarray) -> Lch:
    chroma = np.hypot(a, b)
    hue = (np.degrees(np.arctan2(b, a)) + 360.0) % 360.0
    return np.stack([l_values, chroma, hue], axis=-1)


def lab_to_approx_oklch(lab: Lab) -> Lch:
    """
    Lab to an OKLCH-shaped triple: L/100, hypot(a, b)/100, hue in [0, 360).
    This is not the OKLab model; see rgb_to_oklab for that.
    """
    arr = np.asarray(lab, dtype=np.float64)
    return _polar(arr[..., 0] / 100.0, arr[..., 1] / 100.0, arr[..., 2] / 100.0)


# sRGB to OKLab to OKLCH


def rgb_to_oklab(rgb: np.ndarray) -> OKLab:
    """sRGB [0..255] (..., 3) to OKLab (L, a, b)."""
    lms = _linear_rgb(rgb) @ _RGB_TO_LMS.T
    return np.cbrt(lms) @ _LMS_TO_OKLAB.T


def oklab_to_oklch(oklab: OKLab) -> Lch:
    """OKLab to OKLCH: chroma = hypot(a, b), hue = atan2(b, a) in [0, 360)."""
    arr = np.asarray(oklab, dtype=np.float64)
    return _polar(arr[..., 0], arr[..., 1], arr[..., 2])


# String conversions


def rgb_to_hex(rgb: Optional[Sequence[Optional[float]]]) -> str:
    """RGB to lowercase '#rrggbb'. Channels are clamped and rounded first."""
    r, g, b = (round_half_up(v) for v in sanitize_rgb(rgb))
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb_to_hsl(rgb: Optional[Sequence[Optional[float]]]) -> str:
    """RGB to 'hsl(H, S%, L%)' with integer hue in [0, 360) and integer percents."""
    r, g, b = (v / 255.0 for v in sanitize_rgb(rgb))
    hi = max(r, g, b)
    lo = min(r, g, b)
    delta = hi - lo

    hue = 0.0
    if delta != 0.0:
        if hi == r:
            hue = ((g - b) / delta + (6.0 if g < b else 0.0)) * 60.0
        elif hi == g:
            hue = ((b - r) / delta + 2.0) * 60.0
        else:
            hue = ((r - g) / delta + 4.0) * 60.0

    lightness = (hi + lo) / 2.0
    saturation = 0.0 if delta == 0.0 else delta / (1.0 - abs(2.0 * lightness - 1.0))

    h = round_half_up(hue) % 360
    s = round_half_up(saturation * 100.0)
    l = round_half_up(lightness * 100.0)
    return f"hsl({h}, {s}%, {l}%)"


def _format_oklch(lightness: float, chroma: float, hue: float) -> str:
    l_text = f"{max(0.0, float(lightness)):.3f}"
    c_text = f"{max(0.0, float(chroma)):.3f}"
    h_text = f"{(float(hue) % 360.0) + 0.0:.1f}"
    if h_text == "360.0":
        h_text = "0.0"
    return f"oklch({l_text} {c_text} {h_text}deg)"


def rgb_to_oklch(rgb: Optional[Sequence[Optional[float]]]) -> str:
    """RGB to 'oklch(L.LLL C.CCC H.Hdeg)' through the OKLab matrices."""
    lch = oklab_to_oklch(rgb_to_oklab(np.asarray(sanitize_rgb(rgb))))
    return _format_oklch(lch[0], lch[1], lch[2])


def rgb_to_oklch_approx(rgb: Optional[Sequence[Optional[float]]]) -> str:
    """
    RGB to an OKLCH-shaped string through CIE Lab (XYZ, D65).
    Approximate: values differ from rgb_to_oklch for the same input.
    """
    lch = lab_to_approx_oklch(rgb_to_lab(np.asarray(sanitize_rgb(rgb))))
    return _format_oklch(lch[0], lch[1], lch[2])


__all__ = [
    "rgb_to_linear",
    "rgb_to_xyz",
    "xyz_to_lab",
    "rgb_to_lab",
    "lab_to_approx_oklch",
    "rgb_to_oklab",
    "oklab_to_oklch",
    "rgb_to_hex",
    "rgb_to_hsl",
    "rgb_to_oklch",
    "rgb_to_oklch_approx",
]
