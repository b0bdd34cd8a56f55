from __future__ import annotations

from typing import Any

from fastapi import Request

from chat_relay.core.config_resolver import ConfigResolver
from chat_relay.core.llm.deepseek_client import DeepSeekClient


def get_config_resolver() -> ConfigResolver:
    """Dependency provider for the upstream settings resolver (process env as fallback)."""

    return ConfigResolver()


def get_deepseek_client() -> DeepSeekClient:
    """
    Dependency provider for DeepSeekClient.

    Tests override this to plug an `httpx.MockTransport` in.
    """

    return DeepSeekClient()


def get_request_env(request: Request) -> Any:
    """
    Return the request-scoped bindings, if the host attached any.

    Edge runtimes expose per-request bindings under the ASGI scope key `env`;
    plain uvicorn deployments have none and fall back to the process environment.
    """

    return request.scope.get("env")
