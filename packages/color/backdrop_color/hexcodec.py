"""Hex string packing and unpacking for RGB colors."""

from __future__ import annotations

import re

from .errors import ValidationError
from .models import Color

_HEX6 = re.compile(r"[0-9a-fA-F]{6}")


def pad_zero(value: str, length: int = 2) -> str:
    """Left-pad with zeros, then keep only the last ``length`` characters."""
    return (("0" * length) + value)[-length:] if length > 0 else ""


def encode(color: Color) -> str:
    # The 1 << 24 bias keeps leading zero channels, so the slice is always 6 digits.
    decimal = (1 << 24) + (color.r << 16) + (color.g << 8) + color.b
    return "#" + format(decimal, "x")[1:]


def decode(value: str) -> Color:
    digits = value[1:] if value.startswith("#") else value
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if not _HEX6.fullmatch(digits):
        raise ValidationError("Invalid HEX color")
    return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def normalize(value: str) -> str:
    return encode(decode(value))
