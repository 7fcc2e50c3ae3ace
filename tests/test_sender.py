"""Tests for routeprobe.server.sender response emission rules."""

from routeprobe.http.response import Response
from routeprobe.server.sender import send_response


class TestSendResponse:
    async def test_start_and_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("hello").with_header("X-Test", "1"), send)

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"text/html; charset=utf-8"
        assert headers[b"x-test"] == b"1"
        assert headers[b"content-length"] == b"5"
        assert messages[1] == {"type": "http.response.body", "body": b"hello"}

    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("unexpected-body").with_status(204), send)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_head_keeps_length_but_drops_body(self) -> None:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(Response("hello"), send, head=True)

        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"5"
        assert messages[1]["body"] == b""
