"""
User business rules: ownership checks and first-login user resolution.

Ownership is derived, not stored on notes: a user owns a note when the note's
`board_id` is one of the user's boards. Callers must pass a user loaded with
its boards.
"""

from __future__ import annotations

import logging
from typing import Any

from auth import client as auth_client
from auth.schemas import AuthUserProfile
from core.errors import (
    AUTHORIZATION_ERROR,
    FETCH_ERROR,
    RECORD_NOT_FOUND,
    ServerError,
    create_error,
    with_error,
)

from . import repository

logger = logging.getLogger(__name__)

_fetch_error = with_error(FETCH_ERROR, "Failed to fetch user with access token")


def _board_ids(user: dict[str, Any]) -> set[str]:
    return {str(b["id"]) for b in user.get("boards") or []}


def ensure_board_owner(user: dict[str, Any], board: dict[str, Any]) -> dict[str, Any]:
    if str(board["id"]) in _board_ids(user):
        return board
    raise create_error(
        AUTHORIZATION_ERROR,
        f"User {user['id']} is not the owner of board {board['id']}",
    )


def ensure_note_owner(user: dict[str, Any], note: dict[str, Any]) -> dict[str, Any]:
    if str(note["board_id"]) in _board_ids(user):
        return note
    raise create_error(
        AUTHORIZATION_ERROR,
        f"User {user['id']} is not the owner of note {note['id']}",
    )


def get_current_board_for_user_note(
    note: dict[str, Any],
    user: dict[str, Any],
) -> tuple[dict[str, Any], dict[str, Any], dict[str, Any]]:
    board_id = note["board_id"]
    for board in user.get("boards") or []:
        if str(board["id"]) == str(board_id):
            return note, user, board
    raise create_error(RECORD_NOT_FOUND, f"Board {board_id} not found")


async def _create_user(auth_user_profile: AuthUserProfile) -> dict[str, Any]:
    user = await repository.create_user(auth_user_profile=auth_user_profile)
    logger.info("Created user %s for auth id %s", user["id"], auth_user_profile.id)
    return user


async def get_or_create_user(*, auth_id: str, auth_user_profile: AuthUserProfile) -> dict[str, Any]:
    try:
        return await repository.get_user_by_auth_id(auth_id)
    except ServerError as err:
        if err.kind != RECORD_NOT_FOUND:
            raise
    return await _create_user(auth_user_profile)


async def get_or_create_user_by_auth(*, access_token: str, auth_id: str) -> dict[str, Any]:
    """
    Like `get_or_create_user`, but the profile is only fetched from the auth
    provider when the user does not exist yet.
    """
    try:
        return await repository.get_user_by_auth_id(auth_id)
    except ServerError as err:
        if err.kind != RECORD_NOT_FOUND:
            raise

    try:
        profile = await auth_client.fetch_auth_user(access_token=access_token)
    except auth_client.AuthClientError as exc:
        logger.warning("Auth profile fetch failed for %s: %s", auth_id, exc)
        raise _fetch_error(exc) from exc
    return await _create_user(profile)
