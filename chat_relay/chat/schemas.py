from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Opaque unique identifier.")
    role: ChatRole
    content: str = Field(min_length=1)


class SendMessageIn(BaseModel):
    message: str = Field(
        min_length=1,
        description="Free-text user message. Sent to the model as a single turn.",
        examples=["How do I start with liquidity pools?"],
    )


class SendMessageOut(BaseModel):
    message: ChatMessage
