"""Error taxonomy shared by the contrast pipeline."""

from __future__ import annotations


class BackdropError(Exception):
    """Base class for every failure raised by the contrast pipeline."""


class ConfigurationError(BackdropError):
    """No usable image source, bad options, or zero-area geometry."""


class LoadError(BackdropError):
    """Image fetch or decode failed."""


class AccessError(BackdropError):
    """Raster read blocked because the image came from a foreign origin."""


class ValidationError(BackdropError, ValueError):
    """Malformed hex input or an empty pixel sample."""
