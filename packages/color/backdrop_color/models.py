"""Typed value models for geometry, rasters, and colors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError, ValidationError


class FitMode(str, Enum):
    COVER = "cover"
    CONTAIN = "contain"


class ColorTarget(str, Enum):
    COLOR = "color"
    BACKGROUND_COLOR = "background-color"
    CUSTOM_PROPERTY = "custom-property"


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def aspect(self) -> float:
        if self.height == 0:
            raise ConfigurationError("Size has zero height; aspect ratio is undefined")
        return self.width / self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValidationError(f"Rect dimensions must be non-negative, got {self.width}x{self.height}")

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def translated(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def scaled(self, factor: float) -> Rect:
        return Rect(self.x * factor, self.y * factor, self.width * factor, self.height * factor)

    def divided(self, divisor: float) -> Rect:
        return Rect(self.x / divisor, self.y / divisor, self.width / divisor, self.height / divisor)


@dataclass(frozen=True)
class RasterBuffer:
    """RGBA pixels, row-major, 4 bytes per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValidationError(f"RasterBuffer length {len(self.pixels)} does not match {self.width}x{self.height}x4")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValidationError(f"Color channel {name}={value!r} outside [0, 255]")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Theme:
    light: str = "#FFFFFF"
    dark: str = "#000000"
