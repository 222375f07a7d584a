"""Minimal blocking HTTP client: one request in, one structured response out."""

from __future__ import annotations

import logging

from .api import create_client, get, post, post_json
from .client import Client, Exchange
from .errors import ConfigurationError, DecodingError, HttpClientError, TransportError
from .response import Response
from .transport import HttpxTransport, RawResponse, Transport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Client",
    "ConfigurationError",
    "DecodingError",
    "Exchange",
    "HttpClientError",
    "HttpxTransport",
    "RawResponse",
    "Response",
    "Transport",
    "TransportError",
    "create_client",
    "get",
    "post",
    "post_json",
]
