from __future__ import annotations

import logging
import math
import time
import uuid
from dataclasses import dataclass
from typing import Any, Protocol

from chat_relay.chat.prompt import DEFAULT_SYSTEM_PROMPT, render_reply
from chat_relay.chat.schemas import ChatMessage
from chat_relay.core.config_resolver import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DEFAULT_TIMEOUT_MS,
    ConfigResolver,
    SettingsKey,
)
from chat_relay.core.llm.deepseek_client import UpstreamRequest, build_endpoint
from chat_relay.core.llm.results import CompletionResult, MissingCredential, Success
from chat_relay.core.metrics import record_upstream_outcome

logger = logging.getLogger("chat_relay.relay")


class CompletionClient(Protocol):
    async def complete(self, *, request: UpstreamRequest) -> CompletionResult: ...


@dataclass(frozen=True)
class RelayConfig:
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    temperature: float = 0.7
    max_tokens: int = 400
    default_model: str = DEFAULT_MODEL
    default_base_url: str = DEFAULT_BASE_URL
    default_timeout_ms: float = DEFAULT_TIMEOUT_MS


def _parse_timeout_ms(raw: str | None, *, default: float) -> float:
    # Digit-group underscores ("1_000") are rejected, like any other non-numeric text.
    if raw is None or "_" in raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return value


class CompletionRelay:
    """
    Single-turn relay between the chat endpoint and the upstream completion API.

    `complete` never raises for configuration or upstream problems: each one becomes a
    diagnostic reply so the caller always has something to display. Nothing is retried.
    """

    def __init__(
        self,
        *,
        resolver: ConfigResolver,
        client: CompletionClient,
        config: RelayConfig | None = None,
    ):
        self._resolver = resolver
        self._client = client
        self._config = config or RelayConfig()

    def build_payload(self, *, model: str, user_message: str) -> dict[str, Any]:
        # No earlier turns are sent; conversation history belongs to the caller.
        return {
            "model": model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "messages": [
                {"role": "system", "content": self._config.system_prompt},
                {"role": "user", "content": user_message},
            ],
        }

    def build_request(
        self, *, api_key: str, user_message: str, request_scope: Any = None
    ) -> UpstreamRequest:
        resolve = self._resolver.resolve
        timeout_ms = _parse_timeout_ms(
            resolve(SettingsKey.TIMEOUT_MS, request_scope),
            default=self._config.default_timeout_ms,
        )
        base_url = resolve(SettingsKey.BASE_URL, request_scope) or self._config.default_base_url
        model = resolve(SettingsKey.MODEL, request_scope) or self._config.default_model

        return UpstreamRequest(
            endpoint=build_endpoint(base_url.strip()),
            api_key=api_key.strip(),
            payload=self.build_payload(model=model.strip(), user_message=user_message),
            timeout_ms=timeout_ms,
        )

    async def fetch_completion(
        self, *, user_message: str, request_scope: Any = None
    ) -> CompletionResult:
        api_key = self._resolver.resolve(SettingsKey.API_KEY, request_scope)
        if api_key is None:
            return MissingCredential()

        request = self.build_request(
            api_key=api_key, user_message=user_message, request_scope=request_scope
        )
        return await self._client.complete(request=request)

    async def complete(
        self,
        *,
        user_message: str,
        request_scope: Any = None,
        request_id: str | None = None,
    ) -> ChatMessage:
        started = time.perf_counter()
        result = await self.fetch_completion(
            user_message=user_message, request_scope=request_scope
        )
        duration_s = time.perf_counter() - started

        record_upstream_outcome(outcome=result.outcome, duration_s=duration_s)
        self._log_outcome(result=result, request_id=request_id, duration_s=duration_s)

        return ChatMessage(id=str(uuid.uuid4()), role="assistant", content=render_reply(result))

    @staticmethod
    def _log_outcome(
        *, result: CompletionResult, request_id: str | None, duration_s: float
    ) -> None:
        # IMPORTANT: metadata only. Never log the user message, the reply or the API key.
        extra = {
            "request_id": request_id,
            "outcome": result.outcome,
            "upstream_status": getattr(result, "status_code", None),
            "duration_ms": round(duration_s * 1000.0, 2),
        }
        if isinstance(result, MissingCredential):
            logger.warning("Upstream API key is not configured", extra=extra)
        elif isinstance(result, Success):
            logger.info("Upstream completion succeeded", extra=extra)
        else:
            logger.error("Upstream completion failed", extra=extra)
