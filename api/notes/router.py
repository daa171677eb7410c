"""
Note API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from auth import dependencies as auth_dependencies
from core.requests import parse_request

from . import schemas, service

router = APIRouter()


@router.get("/api/notes/{note_id}")
async def get_note(
    note_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_note(note_id, user_id=str(current_user["id"]))


@router.patch("/api/notes/{note_id}")
async def patch_note(
    note_id: str,
    request: Request,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    # Parsed by hand so a bad body is a 400 ValidationError, not FastAPI's 422.
    note_input = await parse_request(
        request,
        schemas.NotePatchRequest,
        "Unable to parse NotePatchRequest",
    )
    return await service.patch_note(note_id, note_input, user_id=str(current_user["id"]))


@router.delete("/api/notes/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> Response:
    await service.delete_note(note_id, user_id=str(current_user["id"]))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
