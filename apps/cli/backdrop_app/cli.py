"""CLI entrypoints for sampling backgrounds, resolving colors, and managing settings."""

from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any

from backdrop_color import (
    BackdropError,
    Color,
    ColorTarget,
    FitMode,
    Rect,
    decode,
    encode,
    get_theme,
    list_themes,
    resolve,
)
from backdrop_core import (
    ContrastEngine,
    InlineStyleApplier,
    StaticLayout,
    build_config,
    config_to_dict,
    configure_logging,
    load_config,
    save_config,
)
from backdrop_core.config import config_path
from backdrop_raster import PillowImageLoader


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _config_file(args: argparse.Namespace) -> Path:
    return Path(args.config).expanduser() if getattr(args, "config", None) else config_path()


def _theme_override(args: argparse.Namespace) -> Any:
    if getattr(args, "invert", False):
        return None
    if args.light or args.dark:
        return {"light": args.light, "dark": args.dark}
    return args.theme


def _rect(values: list[float]) -> Rect:
    x, y, w, h = values
    return Rect(x=x, y=y, width=w, height=h)


def _with_theme_args(args: argparse.Namespace) -> dict[str, Any]:
    raw = config_to_dict(load_config(_config_file(args)))
    theme = _theme_override(args)
    if theme is not None or args.invert:
        raw["theme"] = theme
    return raw


def cmd_sample(args: argparse.Namespace) -> int:
    raw = _with_theme_args(args)
    if args.fit:
        raw["fit"] = args.fit
    if args.stride:
        raw["stride_in_pixels"] = args.stride
    if args.color_target:
        raw["color_target"] = args.color_target
    raw["once"] = True
    cfg = build_config(raw)

    image = Path(args.image).expanduser().resolve()
    layout = StaticLayout(
        background=f'url("{image}")',
        container=_rect(args.container),
        targets={f"target-{idx}": _rect(values) for idx, values in enumerate(args.target)},
    )
    applier = InlineStyleApplier()
    engine = ContrastEngine(layout, PillowImageLoader(), applier, config=cfg)
    results = asyncio.run(engine.launch()) or []

    _print_json(
        {
            "success": True,
            "image": str(image),
            "fit": cfg.fit.value,
            "stride_in_pixels": cfg.stride_in_pixels,
            "targets": [
                {
                    "key": r.key,
                    "source_rect": asdict(r.source_rect),
                    "average": encode(r.color),
                    "rgb": list(r.color.as_tuple()),
                    "contrast": r.hex_color,
                    "style": applier.style_of(r.key),
                }
                for r in results
            ],
        }
    )
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    color = Color(args.r, args.g, args.b)
    cfg = build_config(_with_theme_args(args))
    _print_json({"input": encode(color), "contrast": resolve(color, cfg.theme)})
    return 0


def cmd_hex_encode(args: argparse.Namespace) -> int:
    _print_json({"hex": encode(Color(args.r, args.g, args.b))})
    return 0


def cmd_hex_decode(args: argparse.Namespace) -> int:
    color = decode(args.value)
    _print_json({"r": color.r, "g": color.g, "b": color.b, "hex": encode(color)})
    return 0


def cmd_themes(_args: argparse.Namespace) -> int:
    _print_json({name: asdict(get_theme(name)) for name in list_themes()})
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    path = _config_file(args)
    payload = config_to_dict(load_config(path))
    payload["path"] = str(path)
    _print_json(payload)
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    path = _config_file(args)
    if path.exists() and not args.force:
        _print_json({"success": False, "path": str(path), "error": "config exists; pass --force to overwrite"})
        return 1
    written = save_config(build_config(), path)
    _print_json({"success": True, "path": str(written)})
    return 0


def _add_theme_args(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--theme", default=None, help="Theme preset name (see `themes`)")
    cmd.add_argument("--light", default=None, help="Light color HEX used over dark backgrounds")
    cmd.add_argument("--dark", default=None, help="Dark color HEX used over light backgrounds")
    cmd.add_argument("--invert", action="store_true", help="Ignore any theme and invert the sampled color")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="backdrop", description="Background-aware contrast color tools")
    sub = parser.add_subparsers(dest="command", required=True)

    sample_cmd = sub.add_parser("sample", help="Sample an image behind target rectangles")
    sample_cmd.add_argument("--image", required=True, help="Background image path")
    sample_cmd.add_argument("--container", nargs=4, type=float, required=True, metavar=("X", "Y", "W", "H"))
    sample_cmd.add_argument(
        "--target", nargs=4, type=float, action="append", required=True, metavar=("X", "Y", "W", "H")
    )
    sample_cmd.add_argument("--fit", choices=[m.value for m in FitMode], default=None)
    sample_cmd.add_argument("--stride", type=int, default=None, help="Sample every Nth pixel")
    sample_cmd.add_argument("--color-target", choices=[m.value for m in ColorTarget], default=None)
    sample_cmd.add_argument("--config", default=None, help="Optional config file path")
    _add_theme_args(sample_cmd)
    sample_cmd.set_defaults(func=cmd_sample)

    resolve_cmd = sub.add_parser("resolve", help="Resolve the contrast color for an RGB value")
    resolve_cmd.add_argument("r", type=int)
    resolve_cmd.add_argument("g", type=int)
    resolve_cmd.add_argument("b", type=int)
    resolve_cmd.add_argument("--config", default=None, help="Optional config file path")
    _add_theme_args(resolve_cmd)
    resolve_cmd.set_defaults(func=cmd_resolve)

    hex_cmd = sub.add_parser("hex", help="Hex color conversions")
    hex_sub = hex_cmd.add_subparsers(dest="hex_cmd", required=True)
    encode_cmd = hex_sub.add_parser("encode", help="RGB to HEX")
    encode_cmd.add_argument("r", type=int)
    encode_cmd.add_argument("g", type=int)
    encode_cmd.add_argument("b", type=int)
    encode_cmd.set_defaults(func=cmd_hex_encode)
    decode_cmd = hex_sub.add_parser("decode", help="HEX to RGB")
    decode_cmd.add_argument("value")
    decode_cmd.set_defaults(func=cmd_hex_decode)

    themes_cmd = sub.add_parser("themes", help="List theme presets")
    themes_cmd.set_defaults(func=cmd_themes)

    config_cmd = sub.add_parser("config", help="Show or create the settings file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective settings")
    show_cmd.add_argument("--config", default=None, help="Optional config file path")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write default settings")
    init_cmd.add_argument("--config", default=None, help="Optional config file path")
    init_cmd.add_argument("--force", action="store_true")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        cfg = load_config(_config_file(args))
        configure_logging(replace(cfg.logging, console=False))
        return int(args.func(args))
    except BackdropError as exc:
        _print_json({"success": False, "error": str(exc), "kind": type(exc).__name__})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
