"""Error taxonomy shared by the request pipeline.

Every failure raised by this package derives from :class:`HttpClientError`.
The concrete kinds map onto the three places a call can go wrong:

``ConfigurationError``
    Raised synchronously while validating options or building the request.
    No network activity has happened yet.

``TransportError``
    The network exchange itself failed (refused connection, DNS failure,
    timeout).  Not retried.

``DecodingError``
    Raised lazily by :meth:`oneshot_http.response.Response.json` when the body
    is not valid JSON.

HTTP status codes are never turned into exceptions; they are ordinary data on
the returned :class:`~oneshot_http.response.Response`.
"""

from __future__ import annotations


class HttpClientError(Exception):
    """Base class for all errors raised by :mod:`oneshot_http`."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:  # pragma: no cover - trivial override
        return self.message


class ConfigurationError(HttpClientError, ValueError):
    """Invalid option, method, URL or body supplied by the caller."""

    def __init__(self, message: str, *, option: str | None = None) -> None:
        super().__init__(message)
        self.option = option


class TransportError(HttpClientError):
    """The request could not be exchanged with the remote server."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class DecodingError(HttpClientError, ValueError):
    """The response body could not be decoded as JSON."""


__all__ = [
    "HttpClientError",
    "ConfigurationError",
    "TransportError",
    "DecodingError",
]
