"""Fetch and decode background images with Pillow."""

from __future__ import annotations

import asyncio
import base64
import os
import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

import certifi
from PIL import Image, UnidentifiedImageError

from backdrop_color.errors import LoadError
from backdrop_color.models import Size


@dataclass(frozen=True)
class DecodedImage:
    """A decoded RGBA image plus the metadata the mapper needs."""

    url: str
    image: Image.Image = field(repr=False)
    natural_size: Size
    display_size: Size
    tainted: bool = False


def _build_ssl_context() -> ssl.SSLContext:
    ca_bundle = os.environ.get("BACKDROP_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context(cafile=certifi.where())


def origin_of(url: str) -> str | None:
    parts = urllib.parse.urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}".lower()


class PillowImageLoader:
    """Loads local paths, ``file:``, ``data:`` and ``http(s):`` images.

    When ``page_origin`` is set, http(s) images from any other origin that is
    not listed in ``allowed_origins`` still load but come back tainted, and
    the raster surface refuses to read their pixels.
    """

    def __init__(
        self,
        base_dir: Path | None = None,
        page_origin: str | None = None,
        allowed_origins: tuple[str, ...] = (),
        timeout: int = 30,
    ) -> None:
        self.base_dir = base_dir
        self.page_origin = page_origin.lower().rstrip("/") if page_origin else None
        self.allowed_origins = tuple(o.lower().rstrip("/") for o in allowed_origins)
        self.timeout = timeout

    async def load(self, url: str) -> DecodedImage:
        return await asyncio.to_thread(self.load_sync, url)

    def load_sync(self, url: str) -> DecodedImage:
        data = self._read(url)
        try:
            with Image.open(BytesIO(data)) as raw:
                raw.load()
                image = raw.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise LoadError(f"Could not decode image {url!r}: {exc}") from exc

        size = Size(image.width, image.height)
        return DecodedImage(
            url=url,
            image=image,
            natural_size=size,
            display_size=size,
            tainted=self.is_cross_origin(url),
        )

    def is_cross_origin(self, url: str) -> bool:
        if self.page_origin is None:
            return False
        origin = origin_of(url)
        if origin is None:
            return False
        return origin != self.page_origin and origin not in self.allowed_origins

    def _read(self, url: str) -> bytes:
        scheme = urllib.parse.urlsplit(url).scheme.lower()
        if scheme == "data":
            return self._read_data_uri(url)
        if scheme in ("http", "https"):
            return self._fetch(url)
        if scheme == "file":
            path = Path(urllib.request.url2pathname(urllib.parse.urlsplit(url).path))
        else:
            path = Path(url)
            if not path.is_absolute() and self.base_dir is not None:
                path = self.base_dir / path
        try:
            return path.read_bytes()
        except OSError as exc:
            raise LoadError(f"Could not read image file {str(path)!r}: {exc}") from exc

    def _fetch(self, url: str) -> bytes:
        request = urllib.request.Request(url, headers={"User-Agent": "backdrop/0.1", "Accept": "image/*"})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout, context=_build_ssl_context()) as response:
                return response.read()
        except (urllib.error.URLError, OSError) as exc:
            raise LoadError(f"Could not fetch image {url!r}: {exc}") from exc

    @staticmethod
    def _read_data_uri(url: str) -> bytes:
        header, sep, payload = url.partition(",")
        if not sep:
            raise LoadError("Malformed data URI: missing ',' separator")
        try:
            if header.endswith(";base64"):
                return base64.b64decode(payload, validate=True)
            return urllib.parse.unquote_to_bytes(payload)
        except ValueError as exc:
            raise LoadError(f"Malformed data URI payload: {exc}") from exc
