"""Immutable response value returned by every request."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import DecodingError


@dataclass(frozen=True)
class Response:
    """Status code, headers and raw body of a completed exchange.

    ``status_code`` is kept apart from ``headers``; the header mapping only
    contains headers actually sent by the server.
    """

    body: bytes
    status_code: int
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON.

        Decoding happens on every call and never caches.  Raises
        :class:`~oneshot_http.errors.DecodingError` when the body is not valid
        UTF-8 JSON.
        """

        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DecodingError(f"Invalid JSON format in response body: {exc}") from exc


__all__ = ["Response"]
