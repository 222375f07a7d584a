"""Option validation and layered merging.

Options arrive as plain mappings at two boundaries: when a
:class:`~oneshot_http.client.Client` is constructed and on every
:meth:`~oneshot_http.client.Client.fetch` call.  Each boundary has its own
allow-list.  Validated layers are folded onto :data:`DEFAULT_OPTIONS` in
order, so call-level values win over client-level values, which win over the
built-in defaults.  Headers are merged key by key rather than replaced.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Final, Union

from .errors import ConfigurationError
from .urls import is_absolute_url


Body = Union[bytes, str, Mapping[str, Any]]

DEFAULT_USER_AGENT: Final[str] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/89.0.4389.90 Safari/537.36"
)
DEFAULT_TIMEOUT: Final[int] = 30

METHODS: Final[tuple[str, ...]] = ("GET", "POST", "PUT", "DELETE", "HEAD")
CLIENT_OPTIONS: Final[frozenset[str]] = frozenset({"user_agent", "timeout", "headers", "base_url"})
FETCH_OPTIONS: Final[frozenset[str]] = frozenset({"user_agent", "timeout", "headers", "body", "method"})


def _frozen_headers(headers: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(headers or {}))


@dataclass(frozen=True)
class OptionSet:
    """Fully resolved options for one client or one call."""

    user_agent: str = DEFAULT_USER_AGENT
    timeout: int = DEFAULT_TIMEOUT
    headers: Mapping[str, str] = field(default_factory=_frozen_headers)
    base_url: str | None = None
    method: str | None = None
    body: Body | None = None

    def merge(self, overrides: Mapping[str, Any]) -> "OptionSet":
        """Return a copy with ``overrides`` applied on top of this set.

        ``overrides`` must already have passed :func:`validate_options`.
        """

        changes = {key: value for key, value in overrides.items() if key != "headers"}
        if "headers" in overrides:
            changes["headers"] = _frozen_headers(merge_headers(self.headers, overrides["headers"]))
        return replace(self, **changes)


DEFAULT_OPTIONS: Final[OptionSet] = OptionSet()


def merge_headers(base: Mapping[str, str], overrides: Mapping[str, str]) -> dict[str, str]:
    """Merge header maps key-wise; ``overrides`` wins on a name collision.

    Names compare case-insensitively.  An overridden header keeps its original
    position but takes the spelling and value of the override.
    """

    entries = list(base.items())
    positions = {name.lower(): index for index, (name, _) in enumerate(entries)}
    for name, value in overrides.items():
        index = positions.get(name.lower())
        if index is None:
            positions[name.lower()] = len(entries)
            entries.append((name, value))
        else:
            entries[index] = (name, value)
    return dict(entries)


def validate_options(options: Mapping[str, Any] | None, allowed: frozenset[str]) -> dict[str, Any]:
    """Check ``options`` against ``allowed`` and per-key type rules.

    Returns a normalized copy.  The first violation raises
    :class:`~oneshot_http.errors.ConfigurationError`; nothing is applied.
    """

    if options is None:
        return {}
    if not isinstance(options, Mapping):
        raise ConfigurationError("Options must be a mapping")

    validated: dict[str, Any] = {}
    for key, value in options.items():
        if key not in allowed:
            raise ConfigurationError(f"Invalid option: {key}", option=key)
        validated[key] = _VALIDATORS[key](value)
    return validated


def merge_options(defaults: OptionSet, *layers: Mapping[str, Any]) -> OptionSet:
    """Fold validated option layers onto ``defaults`` in order."""

    merged = defaults
    for layer in layers:
        merged = merged.merge(layer)
    return merged


def _is_ascii(text: str) -> bool:
    try:
        text.encode("ascii")
    except UnicodeEncodeError:
        return False
    return True


def _validate_headers(value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise ConfigurationError("Headers must be a mapping of header names to values", option="headers")
    headers: dict[str, str] = {}
    for name, header_value in value.items():
        if not isinstance(name, str) or not isinstance(header_value, str):
            raise ConfigurationError("Header names and values must be strings", option="headers")
        if not name.strip():
            raise ConfigurationError("Header names must not be empty", option="headers")
        if any(char in name or char in header_value for char in "\r\n"):
            raise ConfigurationError(f"Header {name!r} contains a line break", option="headers")
        if not (_is_ascii(name) and _is_ascii(header_value)):
            raise ConfigurationError(f"Header {name!r} contains non-ASCII characters", option="headers")
        headers[name] = header_value
    return headers


def _validate_user_agent(value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigurationError("User agent must be a string", option="user_agent")
    if not _is_ascii(value):
        raise ConfigurationError("User agent must only contain ASCII characters", option="user_agent")
    return value


def _validate_timeout(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError("Timeout must be an integer", option="timeout")
    if value < 0:
        raise ConfigurationError("Timeout must not be negative", option="timeout")
    return value


def _validate_method(value: Any) -> str:
    if not isinstance(value, str) or value not in METHODS:
        raise ConfigurationError("Method must be GET, POST, PUT, DELETE, or HEAD", option="method")
    return value


def _validate_base_url(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if not is_absolute_url(value):
        raise ConfigurationError("Base URL must be a valid URL", option="base_url")
    return value


def _validate_body(value: Any) -> Body | None:
    if value is None or isinstance(value, (bytes, str)):
        return value
    if isinstance(value, Mapping):
        return dict(value)
    raise ConfigurationError("Body must be bytes, a string or a mapping", option="body")


_VALIDATORS: Final[dict[str, Any]] = {
    "headers": _validate_headers,
    "user_agent": _validate_user_agent,
    "timeout": _validate_timeout,
    "method": _validate_method,
    "base_url": _validate_base_url,
    "body": _validate_body,
}


__all__ = [
    "Body",
    "CLIENT_OPTIONS",
    "DEFAULT_OPTIONS",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "FETCH_OPTIONS",
    "METHODS",
    "OptionSet",
    "merge_headers",
    "merge_options",
    "validate_options",
]
