"""Per-request resolution of upstream settings.

Two ordered sources are consulted:
1. request-scoped bindings (e.g. the `env` object an edge runtime attaches to each request)
2. the process-wide environment (injected; defaults to `os.environ`)

The first value that is non-blank after trimming wins. Absence is a normal outcome.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import StrEnum
from typing import Any


class SettingsKey(StrEnum):
    API_KEY = "DEEPSEEK_API_KEY"
    MODEL = "DEEPSEEK_MODEL"
    TIMEOUT_MS = "DEEPSEEK_TIMEOUT_MS"
    BASE_URL = "DEEPSEEK_BASE_URL"


DEFAULT_MODEL = "deepseek-chat"
DEFAULT_BASE_URL = "https://api.deepseek.com"
DEFAULT_TIMEOUT_MS = 25_000


def _read_binding(*, scope: Any, name: str) -> Any:
    # Bindings may be a plain mapping or an attribute-bearing object.
    if isinstance(scope, Mapping):
        return scope.get(name)
    return getattr(scope, name, None)


def _non_blank(value: Any) -> str | None:
    if isinstance(value, str) and value.strip() != "":
        return value
    return None


class ConfigResolver:
    def __init__(self, *, process_env: Mapping[str, str] | None = None):
        self._process_env = os.environ if process_env is None else process_env

    def resolve(self, key: SettingsKey, request_scope: Any = None) -> str | None:
        name = str(key)
        if request_scope is not None:
            from_request = _non_blank(_read_binding(scope=request_scope, name=name))
            if from_request is not None:
                return from_request
        return _non_blank(self._process_env.get(name))
