import asyncio
import sys
import tempfile
import unittest
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "color"))
sys.path.insert(0, str(ROOT / "packages" / "raster"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from backdrop_color.models import Rect
from backdrop_core import ContrastEngine, InlineStyleApplier, StaticLayout, build_config
from backdrop_raster import PillowImageLoader


class ImagePipelineTests(unittest.TestCase):
    def test_cover_background_from_disk(self):
        with tempfile.TemporaryDirectory() as tmp:
            # 400x200 image: left half pale yellow, right half navy.
            image = Image.new("RGB", (400, 200), (250, 240, 180))
            image.paste((10, 20, 80), (200, 0, 400, 200))
            image.save(Path(tmp) / "hero.png")

            layout = StaticLayout(
                background="url(hero.png)",
                container=Rect(0, 0, 200, 100),
                targets={"left": Rect(20, 20, 40, 30), "right": Rect(140, 20, 40, 30)},
            )
            applier = InlineStyleApplier()
            cfg = build_config({"theme": "mono", "color_target": "custom-property", "custom_property": "--ink"})
            engine = ContrastEngine(layout, PillowImageLoader(base_dir=Path(tmp)), applier, config=cfg)

            results = asyncio.run(engine.launch())

        by_key = {r.key: r for r in results}
        # Container is half the image size, so cover scale is 0.5.
        self.assertEqual(by_key["right"].source_rect, Rect(280, 40, 80, 60))
        self.assertEqual(applier.style_of("left"), {"--ink": "#000000"})
        self.assertEqual(applier.style_of("right"), {"--ink": "#FFFFFF"})


if __name__ == "__main__":
    unittest.main()
