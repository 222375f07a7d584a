"""Network transport: executes a request descriptor and returns raw headers and body."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import httpx

from .errors import TransportError
from .log import redact_headers
from .request import RequestDescriptor


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Raw header lines (status line first) and body bytes as received.

    Requests ask for ``Accept-Encoding: identity`` unless the caller chose an
    encoding.  When a caller does and the server compresses, ``body`` holds
    the decoded bytes while ``Content-Encoding``/``Content-Length`` still
    describe the compressed payload.
    """

    header_lines: tuple[str, ...]
    body: bytes = b""


@runtime_checkable
class Transport(Protocol):
    """Anything able to exchange a single request with a server."""

    def send(self, descriptor: RequestDescriptor, *, timeout: int, user_agent: str) -> RawResponse:
        """Execute ``descriptor`` and return the raw response.

        Implementations must not follow redirects, must return non-2xx
        responses as data, and must raise
        :class:`~oneshot_http.errors.TransportError` on network failure.
        """


class HttpxTransport:
    """Single-shot transport backed by a short-lived :class:`httpx.Client`.

    A new client is opened for every call and closed before returning, so no
    connection outlives the exchange.  ``transport`` lets callers plug in any
    :class:`httpx.BaseTransport`, for example :class:`httpx.MockTransport`.
    """

    def __init__(self, *, transport: httpx.BaseTransport | None = None) -> None:
        self._transport = transport

    def send(self, descriptor: RequestDescriptor, *, timeout: int, user_agent: str) -> RawResponse:
        headers = dict(descriptor.headers)
        present = {name.lower() for name in headers}
        if "user-agent" not in present:
            headers["User-Agent"] = user_agent
        if "accept-encoding" not in present:
            headers["Accept-Encoding"] = "identity"

        logger.debug(
            "Dispatching %s request",
            descriptor.method,
            extra={
                "method": descriptor.method,
                "url": descriptor.url,
                "timeout": timeout,
                "headers": redact_headers(headers),
            },
        )

        try:
            with httpx.Client(
                transport=self._transport,
                timeout=timeout or None,
                follow_redirects=False,
            ) as client:
                request = client.build_request(
                    descriptor.method,
                    descriptor.url,
                    headers=headers,
                    content=descriptor.body or None,
                )
                response = client.send(request)
                body = response.content
        except httpx.HTTPError as exc:
            logger.warning(
                "Transport failure during %s request",
                descriptor.method,
                extra={"method": descriptor.method, "url": descriptor.url, "error": str(exc)},
            )
            detail = str(exc) or type(exc).__name__
            raise TransportError(
                f"Error opening request to {descriptor.url}: {detail}",
                url=descriptor.url,
            ) from exc

        return RawResponse(header_lines=_header_lines(response), body=body)


def _header_lines(response: httpx.Response) -> tuple[str, ...]:
    status_line = f"{response.http_version} {response.status_code} {response.reason_phrase}".rstrip()
    lines = [status_line]
    for name, value in response.headers.raw:
        lines.append(f"{name.decode('latin-1')}: {value.decode('latin-1')}")
    return tuple(lines)


__all__ = ["HttpxTransport", "RawResponse", "Transport"]
