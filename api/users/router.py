"""
User API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies

from . import repository

router = APIRouter()


@router.get("/api/users/me")
async def me(current_user: dict = Depends(auth_dependencies.get_current_user)) -> dict:
    return await repository.get_user(current_user["id"], include_boards=True, include_notes=True)
