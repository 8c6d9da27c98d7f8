"""Color math for background-aware contrast: mapping, sampling, resolving, hex codec."""

from .errors import AccessError, BackdropError, ConfigurationError, LoadError, ValidationError
from .hexcodec import decode, encode, normalize, pad_zero
from .mapping import contain_scale, cover_scale, map_to_source, to_container_local
from .models import Color, ColorTarget, FitMode, RasterBuffer, Rect, Size, Theme
from .resolver import LUMINANCE_THRESHOLD, invert, is_light, luminance, resolve
from .sampler import DEFAULT_STRIDE, average_color
from .themes import DEFAULT_THEME_NAME, get_theme, list_themes

__all__ = [
    "AccessError",
    "BackdropError",
    "Color",
    "ColorTarget",
    "ConfigurationError",
    "DEFAULT_STRIDE",
    "DEFAULT_THEME_NAME",
    "FitMode",
    "LUMINANCE_THRESHOLD",
    "LoadError",
    "RasterBuffer",
    "Rect",
    "Size",
    "Theme",
    "ValidationError",
    "average_color",
    "contain_scale",
    "cover_scale",
    "decode",
    "encode",
    "get_theme",
    "invert",
    "is_light",
    "list_themes",
    "luminance",
    "map_to_source",
    "normalize",
    "pad_zero",
    "resolve",
    "to_container_local",
]
