"""Test helpers for the chat slice: a scripted upstream behind httpx.MockTransport."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from chat_relay.chat.service import CompletionRelay, RelayConfig
from chat_relay.core.config_resolver import ConfigResolver
from chat_relay.core.llm.deepseek_client import DeepSeekClient

Responder = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class RecordingUpstream:
    """Wraps a responder and records every request that reached the transport."""

    def __init__(self, responder: Responder):
        self._responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        return self._responder(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def client(self) -> DeepSeekClient:
        return DeepSeekClient(transport=httpx.MockTransport(self))


def completion_body(content: Any) -> dict[str, Any]:
    return {"choices": [{"message": {"content": content}}]}


def reply_with(content: Any) -> Responder:
    return lambda request: httpx.Response(200, json=completion_body(content))


def make_relay(
    upstream: RecordingUpstream,
    *,
    env: dict[str, str] | None = None,
    config: RelayConfig | None = None,
) -> CompletionRelay:
    return CompletionRelay(
        resolver=ConfigResolver(process_env=env or {}),
        client=upstream.client(),
        config=config,
    )
