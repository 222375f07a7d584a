from __future__ import annotations

import pytest

from oneshot_http.errors import DecodingError
from oneshot_http.response import Response


def test_json_decodes_body() -> None:
    response = Response(body=b'{"title":"foo","userId":1}', status_code=200, headers={})

    assert response.json() == {"title": "foo", "userId": 1}
    assert response.json() == response.json()


def test_json_raises_decoding_error_on_malformed_body() -> None:
    response = Response(body=b"<html>not json</html>", status_code=500, headers={})

    with pytest.raises(DecodingError, match="Invalid JSON format in response body"):
        response.json()


def test_json_raises_decoding_error_on_empty_body() -> None:
    with pytest.raises(DecodingError):
        Response(body=b"", status_code=204).json()


def test_json_raises_decoding_error_on_invalid_utf8() -> None:
    with pytest.raises(DecodingError):
        Response(body=b"\xff\xfe", status_code=200).json()


def test_text_decodes_with_replacement() -> None:
    assert Response(body="café".encode(), status_code=200).text == "café"
    assert Response(body=b"\xff", status_code=200).text == "�"


def test_response_is_immutable() -> None:
    response = Response(body=b"", status_code=200)

    with pytest.raises(AttributeError):
        response.status_code = 500  # type: ignore[misc]
