import sys
import unittest
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "color"))
sys.path.insert(0, str(ROOT / "packages" / "raster"))

from backdrop_color.errors import AccessError
from backdrop_color.models import Rect, Size
from backdrop_raster.loader import DecodedImage
from backdrop_raster.surface import RasterSurface


def _decoded(color, size=(50, 50), tainted=False) -> DecodedImage:
    image = Image.new("RGBA", size, color)
    return DecodedImage(
        url="memory://test",
        image=image,
        natural_size=Size(*size),
        display_size=Size(*size),
        tainted=tainted,
    )


def _pixel(buf, x, y):
    i = (y * buf.width + x) * 4
    return tuple(buf.pixels[i : i + 4])


class RasterSurfaceTests(unittest.TestCase):
    def test_draws_region_at_target_size(self):
        surface = RasterSurface()
        buf = surface.draw(_decoded((255, 0, 0, 255)), Rect(0, 0, 10, 10), 20, 15)
        self.assertEqual((buf.width, buf.height), (20, 15))
        self.assertEqual(len(buf.pixels), 20 * 15 * 4)
        self.assertEqual(_pixel(buf, 0, 0), (255, 0, 0, 255))
        self.assertEqual(_pixel(buf, 19, 14), (255, 0, 0, 255))

    def test_outside_image_reads_opaque_black(self):
        surface = RasterSurface()
        buf = surface.draw(_decoded((255, 0, 0, 255)), Rect(-10, 0, 20, 10), 20, 10)
        self.assertEqual(_pixel(buf, 0, 5), (0, 0, 0, 255))
        self.assertEqual(_pixel(buf, 15, 5), (255, 0, 0, 255))

    def test_fully_outside_is_black(self):
        buf = RasterSurface().draw(_decoded((0, 255, 0, 255)), Rect(100, 100, 5, 5), 5, 5)
        self.assertEqual(set(buf.pixels[i : i + 4] for i in range(0, len(buf.pixels), 4)), {bytes([0, 0, 0, 255])})

    def test_reused_canvas_is_cleared_between_draws(self):
        surface = RasterSurface()
        surface.draw(_decoded((255, 0, 0, 255)), Rect(0, 0, 10, 10), 10, 10)
        buf = surface.draw(_decoded((0, 0, 255, 255)), Rect(45, 0, 10, 5), 10, 5)
        self.assertEqual(_pixel(buf, 9, 4), (0, 0, 0, 255))
        self.assertEqual(_pixel(buf, 0, 0), (0, 0, 255, 255))

    def test_canvas_is_lazy_grows_and_resets(self):
        surface = RasterSurface()
        self.assertEqual(surface.size, (0, 0))
        surface.draw(_decoded((1, 2, 3, 255)), Rect(0, 0, 10, 10), 10, 10)
        surface.draw(_decoded((1, 2, 3, 255)), Rect(0, 0, 5, 5), 5, 20)
        self.assertEqual(surface.size, (10, 20))
        surface.reset()
        self.assertEqual(surface.size, (0, 0))

    def test_fractional_target_size_truncates(self):
        buf = RasterSurface().draw(_decoded((9, 9, 9, 255)), Rect(0, 0, 10, 10), 10.9, 3.2)
        self.assertEqual((buf.width, buf.height), (10, 3))

    def test_zero_size_target_gives_empty_buffer(self):
        buf = RasterSurface().draw(_decoded((9, 9, 9, 255)), Rect(0, 0, 0, 10), 0, 10)
        self.assertEqual(buf.pixels, b"")

    def test_tainted_image_cannot_be_read(self):
        with self.assertRaises(AccessError):
            RasterSurface().draw(_decoded((9, 9, 9, 255), tainted=True), Rect(0, 0, 5, 5), 5, 5)


if __name__ == "__main__":
    unittest.main()
