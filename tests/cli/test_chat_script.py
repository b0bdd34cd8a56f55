from __future__ import annotations

import json

import httpx

from scripts.chat import UNAVAILABLE_MESSAGE, send_message


def _client(handler) -> httpx.Client:
    return httpx.Client(base_url="http://relay.test", transport=httpx.MockTransport(handler))


def test_sends_trimmed_message_and_returns_reply_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"message": {"id": "1", "role": "assistant", "content": "hi there"}}
        )

    with _client(handler) as client:
        assert send_message(client=client, text="  hello \n") == "hi there"

    assert seen[0].url.path == "/chat/messages"
    assert json.loads(seen[0].content) == {"message": "hello"}


def test_blank_input_is_not_sent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("should not be called")

    with _client(handler) as client:
        assert send_message(client=client, text="   ") is None


def test_unreachable_relay_returns_fallback_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with _client(handler) as client:
        assert send_message(client=client, text="hello") == UNAVAILABLE_MESSAGE


def test_error_status_returns_fallback_text() -> None:
    with _client(lambda r: httpx.Response(502, text="bad gateway")) as client:
        assert send_message(client=client, text="hello") == UNAVAILABLE_MESSAGE
