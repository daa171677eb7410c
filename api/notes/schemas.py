"""
Note API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NotePatchRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=500)
    content: str | None = Field(default=None, max_length=100_000)
    board_id: str | None = Field(default=None, min_length=1)
