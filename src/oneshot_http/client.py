"""Client facade tying option resolution, request building, transport and parsing together."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .config import options_from_env
from .options import (
    CLIENT_OPTIONS,
    DEFAULT_OPTIONS,
    FETCH_OPTIONS,
    OptionSet,
    merge_options,
    validate_options,
)
from .parser import parse_response
from .request import JSON_CONTENT_TYPE, RequestDescriptor, build_request, encode_form
from .response import Response
from .transport import HttpxTransport, Transport


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Exchange:
    """A request together with the response it produced."""

    request: RequestDescriptor
    response: Response


Observer = Callable[[Exchange], None]


class Client:
    """Blocking HTTP client issuing one independent request per call.

    The client owns a validated :class:`~oneshot_http.options.OptionSet` and
    never mutates it, so one instance can be shared between threads.

    Parameters
    ----------
    options:
        Client-level options: ``user_agent``, ``timeout``, ``headers`` and
        ``base_url``.
    transport:
        Object implementing :class:`~oneshot_http.transport.Transport`.
        Defaults to :class:`~oneshot_http.transport.HttpxTransport`.
    observer:
        Optional callable receiving an :class:`Exchange` after every completed
        request.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        *,
        transport: Transport | None = None,
        observer: Observer | None = None,
    ) -> None:
        self._options = merge_options(DEFAULT_OPTIONS, validate_options(options, CLIENT_OPTIONS))
        self._transport = transport if transport is not None else HttpxTransport()
        self._observer = observer

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        env_file: str | os.PathLike[str] | None = None,
        transport: Transport | None = None,
        observer: Observer | None = None,
    ) -> "Client":
        """Build a client from ``ONESHOT_HTTP_*`` environment settings."""

        return cls(options_from_env(environ, env_file=env_file), transport=transport, observer=observer)

    @property
    def options(self) -> OptionSet:
        return self._options

    def get(
        self,
        url: str,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        if query:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{encode_form(query)}"
        return self.fetch(url, {"method": "GET", "headers": dict(headers or {})})

    def post(
        self,
        url: str,
        data: Mapping[str, Any] | bytes | str | None = None,
        as_json: bool = False,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        call_headers = dict(headers or {})
        if as_json:
            call_headers["Content-Type"] = JSON_CONTENT_TYPE
        return self.fetch(url, {"method": "POST", "body": data, "headers": call_headers})

    def fetch(self, url: str, options: Mapping[str, Any] | None = None) -> Response:
        """Run the full pipeline for ``url`` and return the response.

        Raises
        ------
        ConfigurationError
            Invalid options, method, URL or body.  Raised before any network
            activity.
        TransportError
            The exchange failed at the network level.
        """

        effective = self._options.merge(validate_options(options, FETCH_OPTIONS))
        descriptor = build_request(url, effective)
        raw = self._transport.send(
            descriptor,
            timeout=effective.timeout,
            user_agent=effective.user_agent,
        )
        response = parse_response(raw)

        logger.debug(
            "Received response for %s request",
            descriptor.method,
            extra={"method": descriptor.method, "url": descriptor.url, "status_code": response.status_code},
        )

        if self._observer is not None:
            self._observer(Exchange(request=descriptor, response=response))
        return response


__all__ = ["Client", "Exchange", "Observer"]
