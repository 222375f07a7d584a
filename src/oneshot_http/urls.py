"""URL validation and base-URL composition."""

from __future__ import annotations

import re
from typing import Final

import httpx


_SUPPORTED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
_FORBIDDEN_CHARACTERS: Final[re.Pattern[str]] = re.compile(r"[\s\x00-\x1f\x7f]")


def is_absolute_url(value: object) -> bool:
    """Return ``True`` when ``value`` is a well-formed absolute http(s) URL."""

    if not isinstance(value, str) or not value:
        return False
    if _FORBIDDEN_CHARACTERS.search(value):
        return False
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, TypeError, ValueError):
        return False
    return url.scheme in _SUPPORTED_SCHEMES and bool(url.host)


def compose_url(base_url: str | None, url: str) -> str:
    """Join ``url`` onto ``base_url`` with exactly one slash between them.

    A single trailing slash is stripped from the base and a single leading
    slash from ``url``.  Without a base URL, ``url`` is returned verbatim.
    """

    if not base_url:
        return url
    base = base_url[:-1] if base_url.endswith("/") else base_url
    path = url[1:] if url.startswith("/") else url
    return f"{base}/{path}"


__all__ = ["is_absolute_url", "compose_url"]
