"""
Note persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core import db
from core.errors import RECORD_NOT_FOUND, create_error

_NOTE_COLUMNS = "id, board_id, title, content, created_at, updated_at"


async def get_note_by_id(note_id: str) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        SELECT {_NOTE_COLUMNS}
        FROM notes
        WHERE id = $1
        """,
        note_id,
    )
    if row is None:
        raise create_error(RECORD_NOT_FOUND, f"Note {note_id} not found")
    return row


async def update_note(note: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        UPDATE notes
        SET board_id = $2,
            title = $3,
            content = $4,
            updated_at = now()
        WHERE id = $1
        RETURNING {_NOTE_COLUMNS}
        """,
        note["id"],
        note["board_id"],
        note.get("title"),
        note.get("content"),
    )
    if row is None:
        raise create_error(RECORD_NOT_FOUND, f"Note {note['id']} not found")
    return row


async def delete_note(note_id: str) -> None:
    row = await db.fetch_one(
        """
        DELETE FROM notes
        WHERE id = $1
        RETURNING id
        """,
        note_id,
    )
    if row is None:
        raise create_error(RECORD_NOT_FOUND, f"Note {note_id} not found")
