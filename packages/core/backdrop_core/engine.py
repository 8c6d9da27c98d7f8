"""Contrast engine: maps, samples, and resolves a color for each target element."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Sequence

from backdrop_color.errors import BackdropError, ConfigurationError
from backdrop_color.mapping import map_to_source, to_container_local
from backdrop_color.models import Color, Rect
from backdrop_color.resolver import resolve
from backdrop_color.sampler import average_color
from backdrop_raster.css import extract_background_url
from backdrop_raster.loader import DecodedImage
from backdrop_raster.surface import RasterSurface

from .collaborators import ImageLoader, LayoutProvider, StyleApplier, TargetBox
from .config import ContrastConfig
from .logging_setup import get_logger


@dataclass(frozen=True)
class ContrastResult:
    key: str
    target_rect: Rect
    source_rect: Rect
    color: Color
    hex_color: str


class ContrastEngine:
    """Applies a contrasting color to every target laid over a background image.

    Each recomputation measures fresh rectangles and samples a fresh buffer.
    Requests are numbered; a request that is overtaken by a newer one while it
    waits for the image never reaches the style applier.
    """

    def __init__(
        self,
        layout: LayoutProvider,
        loader: ImageLoader,
        applier: StyleApplier,
        config: ContrastConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.layout = layout
        self.loader = loader
        self.applier = applier
        self.config = config or ContrastConfig()
        self.logger = logger or get_logger("engine")

        self._surface: RasterSurface | None = None
        self._surface_lock = asyncio.Lock()
        self._load_task: asyncio.Future[DecodedImage] | None = None
        self._generation = 0
        self._launched = False

    @property
    def surface(self) -> RasterSurface:
        if self._surface is None:
            self._surface = RasterSurface()
        return self._surface

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def launched(self) -> bool:
        return self._launched

    def reset_surface(self) -> None:
        self._surface = None

    async def launch(self) -> list[ContrastResult] | None:
        url = extract_background_url(self.layout.background_image())
        self.logger.info("loading background image %s", url, extra={"event": "image_load_start"})
        self._load_task = asyncio.ensure_future(self.loader.load(url))
        self._launched = True
        return await self._run(self._next_generation())

    async def recompute(self) -> list[ContrastResult] | None:
        return await self._run(self._next_generation())

    def request_recompute(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._run(self._next_generation()))
        task.add_done_callback(self._log_task_failure)
        return task

    def on_resize(self) -> asyncio.Task | None:
        if not self.launched:
            self.logger.debug("resize before launch ignored", extra={"event": "resize_ignored"})
            return None
        if self.config.once:
            self.logger.debug("resize ignored in once mode", extra={"event": "resize_ignored"})
            return None
        return self.request_recompute()

    def compute(self, container_rect: Rect, targets: Sequence[TargetBox], image: DecodedImage) -> list[ContrastResult]:
        """Run the pipeline for every target without applying anything."""
        container_size = container_rect.size
        if container_size.is_empty:
            raise ConfigurationError(f"Container has zero area: {container_rect.width}x{container_rect.height}")
        if image.display_size.is_empty or image.natural_size.is_empty:
            raise ConfigurationError(f"Background image {image.url!r} has zero area")

        cfg = self.config
        results: list[ContrastResult] = []
        for box in targets:
            local = to_container_local(box.rect, container_rect)
            source = map_to_source(cfg.fit, local, container_size, image.natural_size, image.display_size)
            buffer = self.surface.draw(image, source, local.width, local.height)
            color = average_color(buffer, cfg.stride_in_pixels)
            results.append(
                ContrastResult(
                    key=box.key,
                    target_rect=local,
                    source_rect=source,
                    color=color,
                    hex_color=resolve(color, cfg.theme),
                )
            )
        return results

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    async def _image(self) -> DecodedImage:
        if self._load_task is None:
            raise ConfigurationError("Engine has not been launched; no background image is loading")
        try:
            return await asyncio.shield(self._load_task)
        except BackdropError as exc:
            self.logger.warning("background image load failed: %s", exc, extra={"event": "image_load_failed"})
            raise

    async def _run(self, generation: int) -> list[ContrastResult] | None:
        image = await self._image()

        async with self._surface_lock:
            if generation != self._generation:
                self.logger.debug(
                    "recompute %s superseded by %s", generation, self._generation, extra={"event": "recompute_superseded"}
                )
                return None

            try:
                results = self.compute(self.layout.container_rect(), self.layout.target_boxes(), image)
            except BackdropError as exc:
                self.logger.warning(
                    "recompute %s failed: %s", generation, exc, extra={"event": "recompute_failed"}
                )
                raise

            for result in results:
                self.applier.apply(result.key, result.hex_color, self.config.color_target, self.config.custom_property)

        self.logger.info(
            "applied %d contrast colors (generation %s)", len(results), generation, extra={"event": "recompute_applied"}
        )
        return results

    def _log_task_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error("scheduled recompute failed: %s", exc, extra={"event": "scheduled_recompute_failed"})
