from __future__ import annotations

from fastapi import FastAPI

from chat_relay.api.schemas import HealthOut
from chat_relay.chat.router import router as chat_router
from chat_relay.core.logging import setup_logging
from chat_relay.core.metrics import PrometheusMetricsMiddleware, metrics_router
from chat_relay.core.middleware.http_logging import HttpLoggingMiddleware
from chat_relay.core.settings import get_settings

setup_logging()


def create_app() -> FastAPI:
    # Upstream settings are resolved per request; only the service title is read here.
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description=(
            "Relays a single user chat message to the DeepSeek chat-completions API and "
            "returns the assistant reply.\n\n"
            "Design principles:\n"
            "- Stateless and single-turn: no history, no persistence.\n"
            "- Upstream failures are returned as assistant messages with a diagnostic text, "
            "never as HTTP errors.\n"
            "- Logs and metrics carry metadata only, never chat content or API keys."
        ),
        openapi_tags=[
            {
                "name": "health",
                "description": "Liveness probe for load balancers and monitoring.",
            },
            {
                "name": "chat",
                "description": "Send a message and receive the assistant reply.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description="Returns a fixed `ok`; does not contact the upstream API.",
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(chat_router)
    return app


app = create_app()
