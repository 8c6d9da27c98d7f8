"""Raster collaborators: CSS url parsing, Pillow image loading, and the drawing surface."""

from .css import extract_background_url
from .loader import DecodedImage, PillowImageLoader, origin_of
from .surface import RasterSurface

__all__ = [
    "DecodedImage",
    "PillowImageLoader",
    "RasterSurface",
    "extract_background_url",
    "origin_of",
]
