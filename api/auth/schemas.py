"""
Auth provider payloads.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuthUserProfile(BaseModel):
    # Provider-side user id; stored as users.auth_id.
    id: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, max_length=320)
    given_name: str | None = None
    family_name: str | None = None
    picture: str | None = None
