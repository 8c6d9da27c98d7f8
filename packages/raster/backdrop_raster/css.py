"""Helpers for reading image references out of CSS style values."""

from __future__ import annotations

import re

from backdrop_color.errors import ConfigurationError

_URL = re.compile(r"""url\(\s*(['"]?)(?P<src>.*?)\1\s*\)""", re.IGNORECASE)


def extract_background_url(value: str | None) -> str:
    """Return the first ``url(...)`` target of a ``background-image`` value."""
    match = _URL.search(value or "")
    if match is None or not match.group("src").strip():
        raise ConfigurationError(
            f"No image url in background-image value {value!r}; is the background-image property set?"
        )
    return match.group("src").strip()
