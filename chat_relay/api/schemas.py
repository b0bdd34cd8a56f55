from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Liveness probe response."""

    status: Literal["ok"] = Field(
        default="ok",
        description="Always `ok` while the process is serving requests.",
        examples=["ok"],
    )
