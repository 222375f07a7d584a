from __future__ import annotations

import contextlib
import json
import sys
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, List
from unittest import mock
from urllib.parse import parse_qs, urlsplit

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from oneshot_http.request import RequestDescriptor  # noqa: E402
from oneshot_http.transport import RawResponse  # noqa: E402


AUTH_TOKEN = "Bearer secret_token"


@pytest.fixture
def mocker():
    patchers: List[mock._patch] = []

    class _Mocker:
        def patch(self, target, *args, **kwargs):
            patcher = mock.patch(target, *args, **kwargs)
            patched = patcher.start()
            patchers.append(patcher)
            return patched

    try:
        yield _Mocker()
    finally:
        while patchers:
            patchers.pop().stop()


class RecordingTransport:
    """Transport double returning scripted raw responses and recording calls."""

    def __init__(self, *responses: RawResponse) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[RequestDescriptor, int, str]] = []

    def send(self, descriptor: RequestDescriptor, *, timeout: int, user_agent: str) -> RawResponse:
        self.calls.append((descriptor, timeout, user_agent))
        if not self.responses:
            return RawResponse(header_lines=("HTTP/1.1 200 OK",), body=b"{}")
        return self.responses.pop(0)


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


class EchoRequestHandler(BaseHTTPRequestHandler):
    """JSON echo routes guarded by a bearer token, used by the end-to-end tests."""

    def log_message(self, format: str, *args) -> None:  # noqa: A003 - inherited signature
        return

    def _send_json(self, status: int, payload: Any) -> None:
        body = json.dumps(payload).encode()
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def _authorized(self) -> bool:
        if self.headers.get("Authorization") != AUTH_TOKEN:
            self._send_json(401, {"error": "Unauthorized"})
            return False
        return True

    def do_GET(self) -> None:  # noqa: N802 - http.server naming
        if not self._authorized():
            return
        parts = urlsplit(self.path)
        query = {key: values[0] for key, values in parse_qs(parts.query).items()}
        if parts.path == "/api/data":
            self._send_json(200, {"message": "GET request received"})
        elif parts.path == "/api/search":
            self._send_json(
                200,
                {
                    "message": "GET request received",
                    "name": query.get("name", "Guest"),
                    "page": int(query.get("page", 1)),
                    "limit": int(query.get("limit", 10)),
                },
            )
        elif parts.path == "/api/headers":
            self._send_json(200, {key.lower(): value for key, value in self.headers.items()})
        elif parts.path == "/api/redirect":
            self.send_response(302)
            self.send_header("Location", "/api/data")
            self.send_header("Content-Length", "0")
            self.end_headers()
        else:
            self._send_json(404, {"error": "Not found", "route": self.path})

    def do_HEAD(self) -> None:  # noqa: N802 - http.server naming
        self.do_GET()

    def do_POST(self) -> None:  # noqa: N802 - http.server naming
        body = self._read_body()
        if not self._authorized():
            return
        path = urlsplit(self.path).path
        content_type = self.headers.get("Content-Type")
        if path == "/api/post/data":
            if content_type != "application/json":
                self._send_json(400, {"error": "Invalid content type"})
                return
            try:
                payload = json.loads(body)
            except ValueError:
                self._send_json(400, {"error": "Invalid JSON"})
                return
            self._send_json(200, payload)
        elif path == "/api/post/data/form":
            if content_type != "application/x-www-form-urlencoded":
                self._send_json(400, {"error": "Invalid content type"})
                return
            form = {key: values[0] for key, values in parse_qs(body.decode()).items()}
            if not form:
                self._send_json(400, {"error": "No data provided"})
                return
            self._send_json(200, form)
        else:
            self._send_json(404, {"error": "Not found", "route": self.path})


@pytest.fixture(scope="session")
def echo_server() -> Iterator[str]:
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoRequestHandler)
    server.daemon_threads = True

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        with contextlib.suppress(Exception):
            server.shutdown()
        server.server_close()
        thread.join(timeout=5)
