# palette_extract/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Optional, Union

from PIL import Image, ImageOps

from .constants import MAX_DECODE_SIZE
from .core_types import PixelData

"""
Pixel source: decode an image into a flat RGBA buffer (sRGB), downscaled so
the longest side is at most max_size.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present

    # Enum on newer Pillow, module constant on older releases
    _PERCEPTUAL = getattr(ImageCms, "Intent", None)
    _PERCEPTUAL = _PERCEPTUAL.PERCEPTUAL if _PERCEPTUAL else ImageCms.INTENT_PERCEPTUAL
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]
    _PERCEPTUAL = 0

ImageSource = Union[str, Path, bytes, bytearray, BinaryIO, Image.Image]


def pillow_resample_from_name(name: str) -> Image.Resampling:
    """Map a string to a Pillow resampling filter enum."""
    if name == "nearest":
        return Image.Resampling.NEAREST
    if name == "bilinear":
        return Image.Resampling.BILINEAR
    if name == "bicubic":
        return Image.Resampling.BICUBIC
    if name == "lanczos":
        return Image.Resampling.LANCZOS
    return Image.Resampling.BILINEAR  # default


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=_PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def fit_within(width: int, height: int, max_size: Optional[int]) -> tuple[int, int]:
    """Target size with the longest side <= max_size; never upscales."""
    if max_size is None or max_size <= 0:
        return width, height
    scale = min(1.0, max_size / float(max(width, height)))
    if scale >= 1.0:
        return width, height
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def _open(source: ImageSource) -> Image.Image:
    if isinstance(source, Image.Image):
        return source
    if isinstance(source, (bytes, bytearray)):
        return Image.open(io.BytesIO(bytes(source)))
    return Image.open(source)


def load_pixel_data(
    source: ImageSource,
    max_size: Optional[int] = MAX_DECODE_SIZE,
    resample: str = "bilinear",
) -> PixelData:
    """
    Decode source into PixelData(width, height, RGBA bytes).

    Args:
      source  : path, raw encoded bytes, binary file object, or PIL image
      max_size: cap for the longest side; None or <= 0 keeps the full size
      resample: nearest | bilinear | bicubic | lanczos

    Raises:
      Pillow's own errors (FileNotFoundError, UnidentifiedImageError, ...)
      unchanged.
    """
    im0 = _open(source)
    try:
        im = _convert_to_srgb_rgba(im0)
        width, height = fit_within(im.width, im.height, max_size)
        if (width, height) != im.size:
            im = im.resize((width, height), resample=pillow_resample_from_name(resample))
        return PixelData(width=width, height=height, pixels=im.tobytes())
    finally:
        if im0 is not source:
            im0.close()


__all__ = [
    "ImageSource",
    "pillow_resample_from_name",
    "fit_within",
    "load_pixel_data",
]
