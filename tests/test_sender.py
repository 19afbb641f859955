"""Tests for rose.server.sender response emission rules."""

import pytest

from rose.http.response import Response
from rose.server.sender import send_response


async def _emit(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_200_preserves_body(self) -> None:
        messages = await _emit(Response("ok"))
        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        assert dict(messages[0]["headers"])[b"content-length"] == b"2"
        assert messages[1] == {"type": "http.response.body", "body": b"ok"}

    @pytest.mark.parametrize("status", [204, 304, 101])
    async def test_no_body_statuses(self, status: int) -> None:
        messages = await _emit(Response("unexpected-body").with_status(status))
        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_header_names_lowercased(self) -> None:
        messages = await _emit(Response("x", headers={"Content-Type": "text/plain"}))
        assert (b"content-type", b"text/plain") in messages[0]["headers"]

    async def test_user_content_length_replaced(self) -> None:
        messages = await _emit(Response("abc", headers={"Content-Length": "99"}))
        lengths = [v for k, v in messages[0]["headers"] if k == b"content-length"]
        assert lengths == [b"3"]

    async def test_utf8_length(self) -> None:
        messages = await _emit(Response("é"))
        assert dict(messages[0]["headers"])[b"content-length"] == b"2"
