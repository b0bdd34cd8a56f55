from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from chat_relay.chat.schemas import SendMessageIn, SendMessageOut
from chat_relay.chat.service import CompletionRelay, RelayConfig
from chat_relay.core.config_resolver import ConfigResolver
from chat_relay.core.llm.deepseek_client import DeepSeekClient
from chat_relay.core.llm.deps import get_config_resolver, get_deepseek_client, get_request_env
from chat_relay.core.settings import get_settings

router = APIRouter(prefix="/chat", tags=["chat"])


def get_completion_relay(
    resolver: ConfigResolver = Depends(get_config_resolver),
    client: DeepSeekClient = Depends(get_deepseek_client),
) -> CompletionRelay:
    settings = get_settings()
    config = RelayConfig(
        system_prompt=settings.relay_system_prompt,
        temperature=settings.relay_temperature,
        max_tokens=settings.relay_max_tokens,
    )
    return CompletionRelay(resolver=resolver, client=client, config=config)


@router.post(
    "/messages",
    response_model=SendMessageOut,
    summary="Send a message",
    description=(
        "Forward one user message to the completion API and return the assistant reply.\n\n"
        "Each call is single-turn and stateless. Upstream failures (missing API key, HTTP "
        "errors, timeouts, network errors, empty replies) are not HTTP errors: they come "
        "back as an assistant message carrying a human-readable diagnostic."
    ),
)
async def send_message(
    payload: SendMessageIn,
    request: Request,
    relay: CompletionRelay = Depends(get_completion_relay),
    request_env: Any = Depends(get_request_env),
) -> SendMessageOut:
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")
    reply = await relay.complete(
        user_message=payload.message,
        request_scope=request_env,
        request_id=request_id,
    )
    return SendMessageOut(message=reply)
