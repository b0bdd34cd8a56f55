from __future__ import annotations

import pytest

from chat_relay.core.config_resolver import SettingsKey


@pytest.fixture(autouse=True)
def _isolate_upstream_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # A developer's real DEEPSEEK_* variables must never reach the tests.
    for key in SettingsKey:
        monkeypatch.delenv(str(key), raising=False)


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    # Settings are cached via @lru_cache; clear so env changes in a test take effect.
    from chat_relay.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from chat_relay.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
