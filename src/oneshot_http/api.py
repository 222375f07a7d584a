"""Module-level shortcuts that build a default client and delegate to it."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .client import Client, Observer
from .response import Response


def create_client(options: Mapping[str, Any] | None = None, observer: Observer | None = None) -> Client:
    return Client(options, observer=observer)


def get(
    url: str,
    query: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Response:
    return create_client().get(url, query, headers)


def post(
    url: str,
    data: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Response:
    return create_client().post(url, data or {}, False, headers)


def post_json(
    url: str,
    data: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> Response:
    return create_client().post(url, data or {}, True, headers)


__all__ = ["create_client", "get", "post", "post_json"]
