"""Parse raw response header lines into a :class:`~oneshot_http.response.Response`."""

from __future__ import annotations

import re
from collections.abc import Iterable
from http import HTTPStatus
from types import MappingProxyType
from typing import Final

from .response import Response
from .transport import RawResponse


FALLBACK_STATUS_CODE: Final[int] = HTTPStatus.HTTP_VERSION_NOT_SUPPORTED.value
_STATUS_LINE: Final[re.Pattern[str]] = re.compile(r"^HTTP/\S*\s+(\d{3})(?:\s|$)")


def parse_header_lines(lines: Iterable[str]) -> tuple[int | None, dict[str, str]]:
    """Split raw header lines into a status code and a header map.

    Status lines set the status code (the last one wins).  Other lines are
    split on their first colon; later duplicates overwrite earlier ones.
    Lines of neither shape are ignored.
    """

    status_code: int | None = None
    headers: dict[str, str] = {}
    for line in lines:
        match = _STATUS_LINE.match(line)
        if match:
            status_code = int(match.group(1))
            continue
        name, separator, value = line.partition(":")
        if separator and name.strip():
            headers[name.strip()] = value.strip()
    return status_code, headers


def parse_response(raw: RawResponse) -> Response:
    """Pair the parsed headers with the untouched body.

    A missing or unparseable status line yields :data:`FALLBACK_STATUS_CODE`
    (505) rather than an error.
    """

    status_code, headers = parse_header_lines(raw.header_lines)
    if status_code is None:
        status_code = FALLBACK_STATUS_CODE
    return Response(body=raw.body, status_code=status_code, headers=MappingProxyType(headers))


__all__ = ["FALLBACK_STATUS_CODE", "parse_header_lines", "parse_response"]
