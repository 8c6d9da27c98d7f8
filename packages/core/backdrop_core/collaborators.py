"""Interfaces the engine talks to, plus in-process defaults for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from backdrop_color.models import ColorTarget, Rect
from backdrop_raster.loader import DecodedImage


@dataclass(frozen=True)
class TargetBox:
    key: str
    rect: Rect


class ImageLoader(Protocol):
    async def load(self, url: str) -> DecodedImage: ...


class LayoutProvider(Protocol):
    def background_image(self) -> str: ...

    def container_rect(self) -> Rect: ...

    def target_boxes(self) -> list[TargetBox]: ...


class StyleApplier(Protocol):
    def apply(self, target_key: str, hex_color: str, color_target: ColorTarget, custom_property: str) -> None: ...


@dataclass
class StaticLayout:
    """Fixed page-space rectangles; call ``resize`` to simulate a viewport change."""

    background: str
    container: Rect
    targets: dict[str, Rect] = field(default_factory=dict)

    def background_image(self) -> str:
        return self.background

    def container_rect(self) -> Rect:
        return self.container

    def target_boxes(self) -> list[TargetBox]:
        return [TargetBox(key=key, rect=rect) for key, rect in self.targets.items()]

    def resize(self, container: Rect, targets: dict[str, Rect] | None = None) -> None:
        self.container = container
        if targets is not None:
            self.targets = dict(targets)


class InlineStyleApplier:
    """Keeps the applied declarations per target, like an inline style attribute."""

    def __init__(self) -> None:
        self.styles: dict[str, dict[str, str]] = {}
        self.applied_count = 0

    def apply(self, target_key: str, hex_color: str, color_target: ColorTarget, custom_property: str) -> None:
        if color_target is ColorTarget.BACKGROUND_COLOR:
            prop = "background-color"
        elif color_target is ColorTarget.CUSTOM_PROPERTY:
            prop = custom_property
        else:
            prop = "color"
        self.styles.setdefault(target_key, {})[prop] = hex_color
        self.applied_count += 1

    def style_of(self, target_key: str) -> dict[str, str]:
        return dict(self.styles.get(target_key, {}))
