"""Reusable drawing surface that resamples an image region into a RasterBuffer."""

from __future__ import annotations

from PIL import Image

from backdrop_color.errors import AccessError
from backdrop_color.models import RasterBuffer, Rect

from .loader import DecodedImage

_OPAQUE_BLACK = (0, 0, 0, 255)


class RasterSurface:
    """Owned RGBA canvas, created on first draw and grown as needed.

    The canvas is opaque: pixels that fall outside the source image read back
    as black, the same as an un-drawn region of an alpha-less canvas.
    """

    def __init__(self, resample: Image.Resampling = Image.Resampling.BILINEAR) -> None:
        self.resample = resample
        self._canvas: Image.Image | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self._canvas.size if self._canvas is not None else (0, 0)

    def reset(self) -> None:
        self._canvas = None

    def _ensure(self, width: int, height: int) -> Image.Image:
        cur_w, cur_h = self.size
        if self._canvas is None or width > cur_w or height > cur_h:
            self._canvas = Image.new("RGBA", (max(width, cur_w), max(height, cur_h)), _OPAQUE_BLACK)
        return self._canvas

    def draw(self, source: DecodedImage, source_rect: Rect, width: float, height: float) -> RasterBuffer:
        """Resample ``source_rect`` of ``source`` into a ``width`` x ``height`` buffer."""
        if source.tainted:
            raise AccessError(f"Pixels of cross-origin image {source.url!r} cannot be read")

        w = max(int(width), 0)
        h = max(int(height), 0)
        if w == 0 or h == 0:
            return RasterBuffer(width=w, height=h, pixels=b"")

        canvas = self._ensure(w, h)
        canvas.paste(_OPAQUE_BLACK, (0, 0, w, h))
        self._blit(canvas, source.image, source_rect, w, h)
        return RasterBuffer(width=w, height=h, pixels=canvas.crop((0, 0, w, h)).tobytes())

    def _blit(self, canvas: Image.Image, image: Image.Image, rect: Rect, w: int, h: int) -> None:
        if rect.is_empty:
            return
        x0 = max(rect.x, 0.0)
        y0 = max(rect.y, 0.0)
        x1 = min(rect.x + rect.width, float(image.width))
        y1 = min(rect.y + rect.height, float(image.height))
        if x1 <= x0 or y1 <= y0:
            return

        kx = w / rect.width
        ky = h / rect.height
        dx0 = round((x0 - rect.x) * kx)
        dy0 = round((y0 - rect.y) * ky)
        dx1 = round((x1 - rect.x) * kx)
        dy1 = round((y1 - rect.y) * ky)
        if dx1 <= dx0 or dy1 <= dy0:
            return

        if image.mode != "RGBA":
            image = image.convert("RGBA")
        patch = image.resize((dx1 - dx0, dy1 - dy0), self.resample, box=(x0, y0, x1, y1))
        canvas.alpha_composite(patch, dest=(dx0, dy0))
