"""Pick a readable color to draw over a sampled background."""

from __future__ import annotations

from .hexcodec import pad_zero
from .models import Color, Theme

LUMINANCE_THRESHOLD = 186

# Weights in thousandths so the threshold comparison is exact integer math.
_WEIGHTS = (299, 587, 114)


def _luminance_milli(color: Color) -> int:
    return _WEIGHTS[0] * color.r + _WEIGHTS[1] * color.g + _WEIGHTS[2] * color.b


def luminance(color: Color) -> float:
    """Perceived brightness proxy, 0.299r + 0.587g + 0.114b."""
    return _luminance_milli(color) / 1000


def is_light(color: Color) -> bool:
    # Strict: exactly 186 counts as dark background.
    return _luminance_milli(color) > LUMINANCE_THRESHOLD * 1000


def invert(color: Color) -> Color:
    return Color(255 - color.r, 255 - color.g, 255 - color.b)


def resolve(color: Color, theme: Theme | None = None) -> str:
    """Return ``theme.dark``/``theme.light`` by luminance, or the inverted color."""
    if theme is not None:
        if is_light(color):
            return theme.dark or "#000000"
        return theme.light or "#FFFFFF"

    inverted = invert(color)
    return "#" + "".join(pad_zero(format(channel, "x")) for channel in inverted.as_tuple())
