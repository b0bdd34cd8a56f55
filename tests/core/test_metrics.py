from __future__ import annotations

from fastapi.testclient import TestClient

from chat_relay.core.config_resolver import ConfigResolver
from chat_relay.core.llm.deps import get_config_resolver
from chat_relay.main import create_app


def test_metrics_exposes_http_and_upstream_series() -> None:
    app = create_app()
    app.dependency_overrides[get_config_resolver] = lambda: ConfigResolver(process_env={})

    with TestClient(app) as client:
        assert client.post("/chat/messages", json={"message": "hello"}).status_code == 200
        res = client.get("/metrics")

    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    text = res.text
    assert 'chat_relay_upstream_outcomes_total{outcome="missing_credential"}' in text
    assert 'route="/chat/messages"' in text
