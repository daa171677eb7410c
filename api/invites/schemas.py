"""
Invite API schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SendInviteRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Emptiness and self-invites are checked by the service.
    friend_email: str = Field(default="", max_length=320)
