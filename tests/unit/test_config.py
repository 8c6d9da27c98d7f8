import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "color"))
sys.path.insert(0, str(ROOT / "packages" / "raster"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from backdrop_color.errors import ConfigurationError
from backdrop_color.models import ColorTarget, FitMode, Theme
from backdrop_core.config import ContrastConfig, build_config, config_to_dict, load_config, save_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = load_config(Path(tmp) / "missing.json")
            self.assertIsInstance(cfg, ContrastConfig)
            self.assertIs(cfg.fit, FitMode.COVER)
            self.assertIsNone(cfg.theme)
            self.assertEqual(cfg.stride_in_pixels, 5)
            self.assertIs(cfg.color_target, ColorTarget.COLOR)
            self.assertFalse(cfg.once)

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = build_config({"fit": "contain", "theme": {"light": "#eee", "dark": "#111"}, "stride_in_pixels": 3})
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertIs(reloaded.fit, FitMode.CONTAIN)
            self.assertEqual(reloaded.theme, Theme(light="#eee", dark="#111"))
            self.assertEqual(reloaded.stride_in_pixels, 3)

    def test_invalid_json_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(config_to_dict(load_config(path)), config_to_dict(ContrastConfig()))

    def test_partial_theme_takes_defaults(self):
        cfg = build_config({"theme": {"dark": "#222222"}})
        self.assertEqual(cfg.theme, Theme(light="#FFFFFF", dark="#222222"))

    def test_null_values_take_defaults(self):
        cfg = build_config({"stride_in_pixels": None, "config_version": None, "theme": Theme(light=None, dark=None)})
        self.assertEqual(cfg.stride_in_pixels, 5)
        self.assertEqual(cfg.theme, Theme(light="#FFFFFF", dark="#000000"))
        self.assertEqual(build_config({"theme": Theme(dark=None)}).theme.dark, "#000000")

    def test_bad_values_in_file_raise_configuration_error(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"stride_in_pixels": "abc"}), encoding="utf-8")
            with self.assertRaises(ConfigurationError):
                load_config(path)

    def test_theme_preset_by_name(self):
        cfg = build_config({"theme": "mono"})
        self.assertEqual(cfg.theme, Theme(light="#FFFFFF", dark="#000000"))

    def test_invalid_values_refuse_to_build(self):
        bad = [
            {"fit": "stretch"},
            {"color_target": "border-color"},
            {"theme": {"light": "#zzzzzz"}},
            {"theme": "no-such-theme"},
            {"theme": 42},
            {"custom_property": "accent"},
            {"stride_in_pixels": "abc"},
            {"stride_in_pixels": True},
            {"config_version": [1]},
            {"logging": "x"},
            {"logging": {"keep_files": "many"}},
            {"theme": {"light": 255}},
        ]
        for raw in bad:
            with self.assertRaises(ConfigurationError, msg=raw):
                build_config(raw)

    def test_stride_and_log_retention_are_clamped(self):
        cfg = build_config({"stride_in_pixels": 0, "logging": {"keep_files": 0, "level": "debug"}})
        self.assertEqual(cfg.stride_in_pixels, 1)
        self.assertEqual(cfg.logging.keep_files, 2)
        self.assertEqual(cfg.logging.level, "DEBUG")

    def test_custom_property_target(self):
        raw = {"color_target": "custom-property", "custom_property": "--hero-fg"}
        cfg = build_config(raw)
        self.assertIs(cfg.color_target, ColorTarget.CUSTOM_PROPERTY)
        self.assertEqual(config_to_dict(cfg)["custom_property"], "--hero-fg")

    def test_saved_file_is_plain_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = save_config(ContrastConfig(), Path(tmp) / "nested" / "config.json")
            data = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(data["fit"], "cover")
            self.assertIsNone(data["theme"])


if __name__ == "__main__":
    unittest.main()
