"""Turn a target URL and resolved options into a request descriptor."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Final
from urllib.parse import urlencode

from .errors import ConfigurationError
from .options import Body, OptionSet
from .urls import compose_url, is_absolute_url


JSON_CONTENT_TYPE: Final[str] = "application/json"
FORM_CONTENT_TYPE: Final[str] = "application/x-www-form-urlencoded"
_BODY_METHODS: Final[frozenset[str]] = frozenset({"POST", "PUT"})


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully resolved request, built once per call."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: bytes = b""

    def header_block(self) -> str:
        return format_headers(self.headers)


def build_request(url: str, options: OptionSet) -> RequestDescriptor:
    """Resolve ``url`` against ``options`` and encode the body.

    Raises :class:`~oneshot_http.errors.ConfigurationError` when the composed
    URL is not an absolute http(s) URL or the body cannot be encoded for the
    method.
    """

    target = compose_url(options.base_url, url)
    if not is_absolute_url(target):
        raise ConfigurationError(f"Invalid URL: {target}")

    method = options.method or "GET"
    body, headers = encode_body(method, options.body, options.headers)
    return RequestDescriptor(
        method=method,
        url=target,
        headers=MappingProxyType(headers),
        body=body,
    )


def encode_body(method: str, body: Body | None, headers: Mapping[str, str]) -> tuple[bytes, dict[str, str]]:
    """Encode ``body`` for the wire and return it with the effective headers.

    Structured bodies are sent as JSON when the ``Content-Type`` header asks
    for it and form-encoded otherwise.  A missing ``Content-Type`` is filled in
    for form bodies; an existing one is never replaced.
    """

    resolved = dict(headers)
    if body is None:
        return b"", resolved
    if isinstance(body, bytes):
        return body, resolved
    if isinstance(body, str):
        return body.encode("utf-8"), resolved

    if method not in _BODY_METHODS:
        raise ConfigurationError(f"A structured body cannot be sent with {method}", option="body")

    content_type = _find_header(resolved, "Content-Type")
    if content_type is not None and _media_type(content_type) == JSON_CONTENT_TYPE:
        try:
            encoded = json.dumps(body, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Body is not JSON serializable: {exc}", option="body") from exc
        return encoded.encode("utf-8"), resolved

    if content_type is None:
        resolved["Content-Type"] = FORM_CONTENT_TYPE
    return encode_form(body).encode("ascii"), resolved


def encode_form(data: Mapping[str, Any]) -> str:
    """Serialize ``data`` as ``application/x-www-form-urlencoded``.

    Nested mappings become ``key[sub]=value`` and sequences ``key[0]=value``.
    Booleans are sent as ``1``/``0`` and ``None`` values are left out.
    """

    return urlencode(list(_flatten(data, prefix=None)))


def format_headers(headers: Mapping[str, str]) -> str:
    """Return the ``Name: Value`` CRLF-terminated wire form of ``headers``."""

    return "".join(f"{name}: {value}\r\n" for name, value in headers.items())


def _flatten(value: Any, prefix: str | None):
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        items = enumerate(value)
    else:
        if prefix is not None:
            scalar = _form_scalar(value)
            if scalar is not None:
                yield prefix, scalar
        return

    for key, item in items:
        name = str(key) if prefix is None else f"{prefix}[{key}]"
        yield from _flatten(item, name)


def _form_scalar(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _find_header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _media_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "RequestDescriptor",
    "build_request",
    "compose_url",
    "encode_body",
    "encode_form",
    "format_headers",
    "is_absolute_url",
]
