from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_relay.chat.prompt import DEFAULT_SYSTEM_PROMPT


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Chat Relay API",
        validation_alias=AliasChoices("APP_NAME", "app_name"),
        description="Service title shown in the OpenAPI docs.",
    )

    # Generation defaults for the completion relay.
    # Upstream credentials/model/timeout/base URL are NOT read here: they are resolved
    # per request (request-scoped bindings first, then process env).
    relay_system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        min_length=1,
        validation_alias=AliasChoices("RELAY_SYSTEM_PROMPT", "relay_system_prompt"),
        description="System instruction (persona) sent ahead of every user message.",
    )
    relay_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("RELAY_TEMPERATURE", "relay_temperature"),
        description="Sampling temperature for upstream completions.",
    )
    relay_max_tokens: int = Field(
        default=400,
        ge=1,
        validation_alias=AliasChoices("RELAY_MAX_TOKENS", "relay_max_tokens"),
        description="Maximum number of tokens the upstream model may generate.",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
