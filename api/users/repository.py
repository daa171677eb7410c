"""
User and board persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from auth.schemas import AuthUserProfile
from core import db, identity
from core.errors import RECORD_NOT_FOUND, create_error

_USER_COLUMNS = "id, auth_id, email, given_name, family_name, picture, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def _attach_boards(user: dict[str, Any], *, include_notes: bool) -> dict[str, Any]:
    boards = await db.fetch_all(
        """
        SELECT id, user_id, title, created_at
        FROM boards
        WHERE user_id = $1
        ORDER BY created_at ASC, id ASC
        """,
        user["id"],
    )
    if include_notes and boards:
        notes = await db.fetch_all(
            """
            SELECT id, board_id, title, content, created_at, updated_at
            FROM notes
            WHERE board_id = ANY($1::text[])
            ORDER BY created_at ASC, id ASC
            """,
            [b["id"] for b in boards],
        )
        for board in boards:
            board["notes"] = [n for n in notes if n["board_id"] == board["id"]]
    user["boards"] = boards
    return user


async def get_user(
    user_id: str,
    *,
    include_boards: bool = True,
    include_notes: bool = False,
) -> dict[str, Any]:
    """
    Load a user; with `include_boards`, the user's boards are attached under
    `boards` (each carrying `notes` when `include_notes` is set).
    """
    row = await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
    if row is None:
        raise create_error(RECORD_NOT_FOUND, f"User {user_id} not found")
    if not include_boards:
        return row
    return await _attach_boards(row, include_notes=include_notes)


async def get_user_by_auth_id(auth_id: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE auth_id = $1
        """,
        auth_id,
    )
    if row is None:
        raise create_error(RECORD_NOT_FOUND, f"User with auth id {auth_id} not found")
    return await _attach_boards(row, include_notes=False)


async def create_user(*, auth_user_profile: AuthUserProfile) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO users (id, auth_id, email, given_name, family_name, picture)
        VALUES ($1, $2, $3, $4, $5, $6)
        RETURNING {_USER_COLUMNS}
        """,
        identity.generate_id("usr"),
        auth_user_profile.id,
        normalize_email(auth_user_profile.email),
        auth_user_profile.given_name,
        auth_user_profile.family_name,
        auth_user_profile.picture,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    row["boards"] = []
    return row
