"""Contrast engine settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from backdrop_color.errors import ConfigurationError, ValidationError
from backdrop_color.hexcodec import decode
from backdrop_color.models import ColorTarget, FitMode, Theme
from backdrop_color.sampler import DEFAULT_STRIDE
from backdrop_color.themes import get_theme


CONFIG_VERSION = 1
DEFAULT_CUSTOM_PROPERTY = "--backdrop-color"


@dataclass
class LoggingConfig:
    keep_files: int = 7
    console: bool = True
    level: str = "INFO"


@dataclass
class ContrastConfig:
    config_version: int = CONFIG_VERSION
    fit: FitMode = FitMode.COVER
    theme: Theme | None = None
    stride_in_pixels: int = DEFAULT_STRIDE
    color_target: ColorTarget = ColorTarget.COLOR
    custom_property: str = DEFAULT_CUSTOM_PROPERTY
    once: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Backdrop" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Backdrop" / "config.json"
    return Path.home() / ".config" / "backdrop" / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _enum(enum_type, value: Any, default):
    if value is None:
        return default
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(m.value for m in enum_type)
        raise ConfigurationError(f"Invalid {enum_type.__name__} {value!r}; expected one of: {allowed}") from exc


def _int(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid {name} {value!r}; expected an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid {name} {value!r}; expected an integer") from exc


def _theme(value: Any) -> Theme | None:
    if value is None or value is False:
        return None
    if isinstance(value, Theme):
        theme = Theme(light=value.light or Theme.light, dark=value.dark or Theme.dark)
    elif isinstance(value, str):
        theme = get_theme(value)
    elif isinstance(value, dict):
        theme = Theme(
            light=value.get("light") or Theme.light,
            dark=value.get("dark") or Theme.dark,
        )
    else:
        raise ConfigurationError(f"Invalid theme {value!r}; expected a preset name or {{light, dark}}")

    for part in (theme.light, theme.dark):
        if not isinstance(part, str):
            raise ConfigurationError(f"Invalid theme color {part!r}")
        try:
            decode(part)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid theme color {part!r}") from exc
    return theme


def _normalize_logging(cfg: ContrastConfig) -> None:
    cfg.logging.keep_files = max(2, _int("logging.keep_files", cfg.logging.keep_files, 7))
    cfg.logging.level = str(cfg.logging.level).upper()


def build_config(raw: dict[str, Any] | None = None) -> ContrastConfig:
    """Resolve every option against its default exactly once."""
    data = dict(raw or {})
    logging_raw = data.get("logging") or {}
    if isinstance(logging_raw, LoggingConfig):
        logging_raw = logging_raw.__dict__
    if not isinstance(logging_raw, dict):
        raise ConfigurationError(f"Invalid logging settings {logging_raw!r}; expected a mapping")

    custom_property = str(data.get("custom_property") or DEFAULT_CUSTOM_PROPERTY)
    if not custom_property.startswith("--"):
        raise ConfigurationError(f"Custom property name must start with '--', got {custom_property!r}")

    cfg = ContrastConfig(
        config_version=_int("config_version", data.get("config_version"), CONFIG_VERSION),
        fit=_enum(FitMode, data.get("fit"), FitMode.COVER),
        theme=_theme(data.get("theme")),
        stride_in_pixels=max(1, _int("stride_in_pixels", data.get("stride_in_pixels"), DEFAULT_STRIDE)),
        color_target=_enum(ColorTarget, data.get("color_target"), ColorTarget.COLOR),
        custom_property=custom_property,
        once=bool(data.get("once", False)),
        logging=_merge(LoggingConfig, logging_raw),
    )
    _normalize_logging(cfg)
    return cfg


def config_to_dict(cfg: ContrastConfig) -> dict[str, Any]:
    return {
        "config_version": cfg.config_version,
        "fit": cfg.fit.value,
        "theme": None if cfg.theme is None else {"light": cfg.theme.light, "dark": cfg.theme.dark},
        "stride_in_pixels": cfg.stride_in_pixels,
        "color_target": cfg.color_target.value,
        "custom_property": cfg.custom_property,
        "once": cfg.once,
        "logging": {
            "keep_files": cfg.logging.keep_files,
            "console": cfg.logging.console,
            "level": cfg.logging.level,
        },
    }


def load_config(path: Path | None = None) -> ContrastConfig:
    path = path or config_path()
    if not path.exists():
        return ContrastConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return ContrastConfig()
    if not isinstance(raw, dict):
        return ContrastConfig()
    return build_config(raw)


def save_config(cfg: ContrastConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config_to_dict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
