"""
Note operations for the owning user.

Every operation loads the note and the caller (with boards), checks ownership
and only then touches the note.
"""

from __future__ import annotations

import logging
from typing import Any

from users import repository as users_repository
from users import service as users_service

from . import repository, schemas

logger = logging.getLogger(__name__)


async def _load_owned_note(note_id: str, user_id: str) -> tuple[dict[str, Any], dict[str, Any]]:
    note = await repository.get_note_by_id(note_id)
    user = await users_repository.get_user(user_id, include_boards=True)
    users_service.ensure_note_owner(user, note)
    return note, user


async def get_note(note_id: str, *, user_id: str) -> dict[str, Any]:
    note, _ = await _load_owned_note(note_id, user_id)
    return note


async def patch_note(
    note_id: str,
    note_input: schemas.NotePatchRequest,
    *,
    user_id: str,
) -> dict[str, Any]:
    note, user = await _load_owned_note(note_id, user_id)

    # An explicit null means "leave unchanged", same as an omitted field.
    changes = note_input.model_dump(exclude_unset=True, exclude_none=True)
    if "board_id" in changes:
        # Moving a note requires owning the destination board as well.
        users_service.ensure_board_owner(user, {"id": changes["board_id"]})

    return await repository.update_note({**note, **changes})


async def delete_note(note_id: str, *, user_id: str) -> None:
    note, _ = await _load_owned_note(note_id, user_id)
    await repository.delete_note(note["id"])
    logger.info("User %s deleted note %s", user_id, note["id"])
