"""Map an element rectangle onto background-image pixel coordinates."""

from __future__ import annotations

from .errors import ConfigurationError
from .models import FitMode, Rect, Size


def to_container_local(target: Rect, container: Rect) -> Rect:
    return target.translated(-container.x, -container.y)


def cover_scale(container_size: Size, image_display_size: Size) -> float:
    """Factor by which a cover-fitted image is drawn larger than its pixels."""
    if container_size.is_empty or image_display_size.is_empty:
        raise ConfigurationError(
            f"cover scale undefined for container {container_size.width}x{container_size.height} "
            f"and image {image_display_size.width}x{image_display_size.height}"
        )
    if image_display_size.aspect >= container_size.aspect:
        return container_size.height / image_display_size.height
    return container_size.width / image_display_size.width


def contain_scale(container_size: Size, image_natural_size: Size) -> float:
    # Assumes the image width spans the container width; letterboxing is ignored.
    if container_size.width == 0:
        raise ConfigurationError("contain scale undefined for a zero-width container")
    return image_natural_size.width / container_size.width


def map_to_source(
    fit: FitMode,
    target_rect: Rect,
    container_size: Size,
    image_natural_size: Size,
    image_display_size: Size,
) -> Rect:
    """Return the image-pixel rectangle behind ``target_rect`` (container-local)."""
    try:
        fit = FitMode(fit)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown fit mode: {fit!r}") from exc
    if fit is FitMode.COVER:
        return target_rect.divided(cover_scale(container_size, image_display_size))
    return target_rect.scaled(contain_scale(container_size, image_natural_size))
