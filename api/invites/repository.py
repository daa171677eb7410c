"""
Invite and user-connection persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db, identity
from core.errors import RECORD_NOT_FOUND, create_error

_INVITE_COLUMNS = "id, user_id, friend_email, accepted_at, created_at"
_CONNECTION_COLUMNS = "id, user_first_id, user_second_id, type, created_at"


async def create_invite(invite: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO invites (id, user_id, friend_email, accepted_at)
        VALUES ($1, $2, $3, $4)
        RETURNING {_INVITE_COLUMNS}
        """,
        invite["id"],
        invite["user_id"],
        invite["friend_email"],
        invite.get("accepted_at"),
    )
    if row is None:
        raise RuntimeError("Failed to create invite.")
    return row


async def get_invite(invite_id: str, *, friend_email: str | None = None) -> dict[str, Any]:
    """
    Load an invite by id. With `friend_email`, only an invite addressed to
    that email matches.
    """
    row = await db.fetch_one(
        f"""
        SELECT {_INVITE_COLUMNS}
        FROM invites
        WHERE id = $1
          AND ($2::text IS NULL OR lower(friend_email) = lower($2::text))
        """,
        invite_id,
        friend_email,
    )
    if row is None:
        raise create_error(RECORD_NOT_FOUND, f"Invite {invite_id} not found")
    return row


async def accept_invite(*, invite_id: str, accepted_by_id: str, type: str) -> dict[str, Any] | None:
    """
    Mark a pending invite accepted and connect its sender to `accepted_by_id`
    in a single transaction.

    Returns the new connection, or None when the invite is no longer pending.
    """
    pool = db.pool()
    try:
        async with pool.acquire() as conn:  # type: asyncpg.Connection
            async with conn.transaction():
                invite = await conn.fetchrow(
                    """
                    UPDATE invites
                    SET accepted_at = now()
                    WHERE id = $1
                      AND accepted_at IS NULL
                    RETURNING user_id
                    """,
                    invite_id,
                )
                if invite is None:
                    return None

                row = await conn.fetchrow(
                    f"""
                    INSERT INTO user_connections (id, user_first_id, user_second_id, type)
                    VALUES ($1, $2, $3, $4)
                    RETURNING {_CONNECTION_COLUMNS}
                    """,
                    identity.generate_id("con"),
                    invite["user_id"],
                    accepted_by_id,
                    type,
                )
    except asyncpg.PostgresError as exc:
        raise db.database_error(exc) from exc

    if row is None:
        raise RuntimeError("Failed to create connection.")
    return dict(row)


async def delete_invite(invite_id: str) -> None:
    await db.execute(
        """
        DELETE FROM invites
        WHERE id = $1
        """,
        invite_id,
    )


async def get_connections(user_id: str) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_CONNECTION_COLUMNS}
        FROM user_connections
        WHERE user_first_id = $1
           OR user_second_id = $1
        ORDER BY created_at DESC, id DESC
        """,
        user_id,
    )
