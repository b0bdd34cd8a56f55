from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from chat_relay.core.llm.results import (
    CompletionResult,
    EmptyContent,
    HttpError,
    Success,
    Timeout,
    TransportError,
)

COMPLETIONS_PATH = "/v1/chat/completions"


@dataclass(frozen=True)
class UpstreamRequest:
    endpoint: str
    api_key: str
    payload: dict[str, Any]
    timeout_ms: float

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }


def build_endpoint(base_url: str) -> str:
    # Only a single trailing slash is removed; any path in base_url is kept as-is.
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    return f"{base_url}{COMPLETIONS_PATH}"


def extract_content(data: Any) -> CompletionResult:
    """Read `choices[0].message.content`; anything missing or blank is EmptyContent."""

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return EmptyContent()

    if not isinstance(content, str) or not content.strip():
        return EmptyContent()
    return Success(text=content.strip())


class DeepSeekClient:
    """
    Chat-completions client for DeepSeek (OpenAI-compatible wire format).

    Design notes:
    - No logging in this module (user messages and replies are not logged).
    - Never raises for upstream failures: every outcome is returned as a CompletionResult.
    - The round trip is bounded by racing the HTTP call against a timer task. The client
      itself has no httpx timeout so there is exactly one deadline per call.
    """

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None):
        self._transport = transport

    async def complete(self, *, request: UpstreamRequest) -> CompletionResult:
        call = asyncio.ensure_future(self._post(request=request))
        timer = asyncio.ensure_future(asyncio.sleep(request.timeout_ms / 1000.0))
        try:
            done, _ = await asyncio.wait({call, timer}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            # Both tasks are settled or cancelled on every exit path (including our own
            # cancellation), so no timer outlives the call.
            timer.cancel()
            if not call.done():
                call.cancel()

        # A response that settled together with the timer still wins.
        if call in done:
            return call.result()
        return Timeout(duration_ms=request.timeout_ms)

    async def _post(self, *, request: UpstreamRequest) -> CompletionResult:
        try:
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                resp = await client.post(
                    request.endpoint, headers=request.headers, json=request.payload
                )
            if not resp.is_success:
                return HttpError(status_code=resp.status_code, body=resp.text or "unknown")
            data = resp.json()
        except Exception as exc:  # noqa: BLE001 - DNS/reset/invalid JSON are all reported alike
            return TransportError(message=str(exc) or None)

        return extract_content(data)
