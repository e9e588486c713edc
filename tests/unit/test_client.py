"""Unit tests for GenerateClient.

All tests use ``httpx.MockTransport`` -- no real generator is contacted.
"""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from eventblock.client import GenerateClient
from eventblock.exceptions import TransportError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    base_url: str = "http://llama.test/api/",
) -> GenerateClient:
    """Build a ``GenerateClient`` whose HTTP calls go to *handler*."""
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return GenerateClient(base_url=base_url, model="llama2", http_client=http_client)


def _ndjson_response(lines: list[str], status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content="\n".join(lines).encode("utf-8"))


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestStreamLines:
    """Successful streaming calls."""

    def test_yields_body_lines(self, ndjson: Callable[..., list[str]]) -> None:
        lines = ndjson("Sure", "!")
        client = _client(lambda request: _ndjson_response(lines))

        assert list(client.stream_lines("hello")) == lines

    def test_posts_generate_request(self, ndjson: Callable[..., list[str]]) -> None:
        """Body carries model, prompt and stream=true; URL ends in /generate."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _ndjson_response(ndjson(""))

        list(_client(handler).stream_lines("the prompt"))

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://llama.test/api/generate"
        assert json.loads(request.content) == {
            "model": "llama2",
            "prompt": "the prompt",
            "stream": True,
        }

    def test_base_url_without_trailing_slash(self) -> None:
        client = _client(lambda request: _ndjson_response([]), base_url="http://llama.test/api")

        assert client.generate_url == "http://llama.test/api/generate"


class TestTransportErrors:
    """Every transport problem becomes a TransportError."""

    @pytest.mark.parametrize("status_code", [400, 404, 500, 503])
    def test_non_success_status(self, status_code: int) -> None:
        client = _client(lambda request: httpx.Response(status_code, text="nope"))

        with pytest.raises(TransportError, match=f"code {status_code}") as exc_info:
            list(client.stream_lines("hello"))

        assert exc_info.value.status_code == status_code

    def test_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="connection refused") as exc_info:
            list(_client(handler).stream_lines("hello"))

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            list(_client(handler).stream_lines("hello"))

    def test_empty_body(self) -> None:
        client = _client(lambda request: httpx.Response(200, content=b""))

        with pytest.raises(TransportError, match="body is null"):
            list(client.stream_lines("hello"))

    def test_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        client = _client(lambda request: httpx.Response(500))

        with caplog.at_level("ERROR", logger="eventblock.client"):
            with pytest.raises(TransportError):
                list(client.stream_lines("hello"))

        assert "HTTP 500" in caplog.text


class TestLifecycle:
    """Client ownership and closing."""

    def test_external_client_not_closed(self) -> None:
        http_client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        client = GenerateClient(http_client=http_client)

        client.close()

        assert http_client.is_closed is False

    def test_own_client_closed_by_context_manager(self) -> None:
        with GenerateClient() as client:
            pass

        assert client._client.is_closed is True
