"""
Invite and friend API endpoints.
"""

from __future__ import annotations

import os

from fastapi import APIRouter, Depends, Request, status

from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


def app_base_url(request: Request) -> str:
    configured = os.environ.get("APP_BASE_URL", "").strip()
    return (configured or str(request.base_url)).rstrip("/")


@router.post("/api/invites", status_code=status.HTTP_201_CREATED)
async def send_invite(
    payload: schemas.SendInviteRequest,
    request: Request,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    name = (current_user.get("given_name") or "").strip() or str(current_user["email"])
    invite = await service.send_invite(
        base_url=app_base_url(request),
        name=name,
        friend_email=payload.friend_email,
        user_id=str(current_user["id"]),
        user_email=str(current_user["email"]),
    )
    return {"invite_id": invite["id"]}


@router.post("/api/invites/{invite_id}/accept")
async def accept_invite(
    invite_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.accept_invite(
        invite_id,
        {"id": str(current_user["id"]), "email": str(current_user["email"])},
    )


@router.get("/api/friends")
async def list_friends(
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    connections = await service.get_friends(str(current_user["id"]))
    return {"connections": connections, "count": len(connections)}
