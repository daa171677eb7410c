"""
Invite workflow.

Flow:
1) send_invite: validate -> persist pending invite -> email the invite link
2) accept_invite: load invite -> load inviter -> mark accepted + connect users (one transaction)
"""

from __future__ import annotations

import html
import logging
from typing import Any

from core import email, identity
from core.errors import EMAIL_ERROR, VALIDATION_ERROR, ServerError, create_error, with_error
from users import repository as users_repository

from . import repository

logger = logging.getLogger(__name__)

CONNECTED = "connected"
INVITE_SUBJECT = "You have been invited to share notes"

_email_error = with_error(EMAIL_ERROR, "Failed to send invite email")


def _normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()


def validate_send_invite(*, friend_email: str, user_email: str) -> str:
    friend = _normalize_email(friend_email)
    if not friend:
        raise create_error(VALIDATION_ERROR, "Friend email is required")
    if friend == _normalize_email(user_email):
        raise create_error(
            VALIDATION_ERROR,
            "Friend email should be different to current user email",
        )
    return friend


def invite_link(base_url: str, invite_id: str) -> str:
    return f"{(base_url or '').rstrip('/')}/invite/{invite_id}"


def invite_html(*, friend_email: str, name: str, link: str) -> str:
    return (
        f"Hello {html.escape(friend_email)}.\n"
        f"<p>You have been invited by {html.escape(name)} to join them in collaborating on Notes.</p>\n"
        f'<p>Accept <a href="{html.escape(link, quote=True)}">invite</a> to get started now.</p>'
    )


async def send_invite(
    *,
    base_url: str,
    name: str,
    friend_email: str,
    user_id: str,
    user_email: str,
) -> dict[str, Any]:
    friend = validate_send_invite(friend_email=friend_email, user_email=user_email)

    invite = await repository.create_invite(
        {
            "id": identity.generate_id("inv"),
            "user_id": user_id,
            "friend_email": friend,
            "accepted_at": None,
        }
    )

    link = invite_link(base_url, invite["id"])
    try:
        await email.send_email(
            to=friend,
            subject=INVITE_SUBJECT,
            html=invite_html(friend_email=friend, name=name, link=link),
        )
    except email.EmailError as exc:
        logger.warning("Invite email to %s failed, removing invite %s: %s", friend, invite["id"], exc)
        try:
            await repository.delete_invite(invite["id"])
        except ServerError as cleanup_err:
            logger.error("Could not remove undelivered invite %s: %s", invite["id"], cleanup_err.message)
        raise _email_error(exc) from exc

    logger.info("User %s invited %s (invite %s)", user_id, friend, invite["id"])
    return invite


async def accept_invite(invite_id: str, accepted_by: dict[str, Any]) -> dict[str, Any]:
    """
    Accept a pending invite on behalf of `accepted_by` ({"id", "email"}).

    Only the invited email can accept, and an invite can be accepted once.
    Returns {"connection": ..., "invited_by": ...}.
    """
    invite = await repository.get_invite(invite_id, friend_email=accepted_by["email"])
    if invite.get("accepted_at") is not None:
        raise create_error(VALIDATION_ERROR, f"Invite {invite_id} has already been accepted")
    if invite["user_id"] == accepted_by["id"]:
        raise create_error(VALIDATION_ERROR, "Users cannot accept their own invite")

    invited_by = await users_repository.get_user(
        invite["user_id"],
        include_boards=False,
        include_notes=False,
    )
    connection = await repository.accept_invite(
        invite_id=invite["id"],
        accepted_by_id=accepted_by["id"],
        type=CONNECTED,
    )
    if connection is None:
        # Accepted by a concurrent request after the check above.
        raise create_error(VALIDATION_ERROR, f"Invite {invite_id} has already been accepted")

    logger.info("Invite %s accepted by %s", invite_id, accepted_by["id"])
    return {"connection": connection, "invited_by": invited_by}


async def get_friends(user_id: str) -> list[dict[str, Any]]:
    return await repository.get_connections(user_id)
