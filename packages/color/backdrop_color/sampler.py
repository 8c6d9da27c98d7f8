"""Strided average color of an RGBA raster."""

from __future__ import annotations

import numpy as np

from .errors import ValidationError
from .models import Color, RasterBuffer

DEFAULT_STRIDE = 5


def average_color(buffer: RasterBuffer, stride_in_pixels: int = DEFAULT_STRIDE) -> Color:
    if stride_in_pixels < 1:
        raise ValidationError(f"stride_in_pixels must be >= 1, got {stride_in_pixels}")

    if buffer.pixel_count == 0:
        raise ValidationError("Cannot average an empty raster: zero pixels sampled")

    pixels = np.frombuffer(buffer.pixels, dtype=np.uint8).reshape((-1, 4))
    sampled = pixels[::stride_in_pixels, :3]
    count = sampled.shape[0]
    sums = sampled.sum(axis=0, dtype=np.int64)
    r, g, b = (int(total) // count for total in sums)
    return Color(r, g, b)
