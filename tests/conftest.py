"""
Shared fixtures.

The database, email API and auth provider are replaced by `FakeStore`, an
in-memory stand-in patched over the repository functions. Every write is
recorded in `store.writes` so tests can assert that nothing was persisted.
"""

import asyncio
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from auth import dependencies as auth_dependencies
from core import email
from core.errors import RECORD_NOT_FOUND, create_error
from invites import repository as invites_repository
from notes import repository as notes_repository
from users import repository as users_repository

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeStore:
    def __init__(self):
        self.users = {}
        self.boards = {}
        self.notes = {}
        self.invites = {}
        self.connections = []
        self.emails = []
        self.writes = []
        self.email_failure = None
        self.accept_failure = None
        self.delete_failure = None
        self.current_user_id = None
        self._seq = 0

    def _next_id(self, prefix):
        self._seq += 1
        return f"{prefix}_{self._seq}"

    # Seeding helpers

    def add_user(self, user_id, *, email, auth_id=None, board_ids=()):
        self.users[user_id] = {
            "id": user_id,
            "auth_id": auth_id or f"auth|{user_id}",
            "email": email,
            "given_name": user_id.capitalize(),
            "family_name": None,
            "picture": None,
            "created_at": NOW,
        }
        for board_id in board_ids:
            self.boards[board_id] = {"id": board_id, "user_id": user_id, "title": board_id, "created_at": NOW}
        return self.users[user_id]

    def add_note(self, note_id, *, board_id, title="Title", content="Body"):
        self.notes[note_id] = {
            "id": note_id,
            "board_id": board_id,
            "title": title,
            "content": content,
            "created_at": NOW,
            "updated_at": NOW,
        }
        return self.notes[note_id]

    def add_invite(self, invite_id, *, user_id, friend_email, accepted_at=None):
        self.invites[invite_id] = {
            "id": invite_id,
            "user_id": user_id,
            "friend_email": friend_email,
            "accepted_at": accepted_at,
            "created_at": NOW,
        }
        return self.invites[invite_id]

    # users.repository

    def _with_boards(self, user):
        user = dict(user)
        user["boards"] = [dict(b) for b in self.boards.values() if b["user_id"] == user["id"]]
        return user

    async def get_user(self, user_id, *, include_boards=True, include_notes=False):
        if user_id not in self.users:
            raise create_error(RECORD_NOT_FOUND, f"User {user_id} not found")
        user = dict(self.users[user_id])
        return self._with_boards(user) if include_boards else user

    async def get_user_by_auth_id(self, auth_id):
        for user in self.users.values():
            if user["auth_id"] == auth_id:
                return self._with_boards(user)
        raise create_error(RECORD_NOT_FOUND, f"User with auth id {auth_id} not found")

    async def create_user(self, *, auth_user_profile):
        self.writes.append("create_user")
        user_id = self._next_id("usr")
        self.users[user_id] = {
            "id": user_id,
            "auth_id": auth_user_profile.id,
            "email": auth_user_profile.email.lower(),
            "given_name": auth_user_profile.given_name,
            "family_name": auth_user_profile.family_name,
            "picture": auth_user_profile.picture,
            "created_at": NOW,
        }
        return self._with_boards(self.users[user_id])

    # notes.repository

    async def get_note_by_id(self, note_id):
        if note_id not in self.notes:
            raise create_error(RECORD_NOT_FOUND, f"Note {note_id} not found")
        return dict(self.notes[note_id])

    async def update_note(self, note):
        self.writes.append("update_note")
        self.notes[note["id"]] = dict(note)
        return dict(note)

    async def delete_note(self, note_id):
        self.writes.append("delete_note")
        if self.notes.pop(note_id, None) is None:
            raise create_error(RECORD_NOT_FOUND, f"Note {note_id} not found")

    # invites.repository

    async def create_invite(self, invite):
        self.writes.append("create_invite")
        row = dict(invite, created_at=NOW)
        self.invites[row["id"]] = row
        return dict(row)

    async def get_invite(self, invite_id, *, friend_email=None):
        invite = self.invites.get(invite_id)
        if invite is None or (
            friend_email is not None and invite["friend_email"].lower() != friend_email.lower()
        ):
            raise create_error(RECORD_NOT_FOUND, f"Invite {invite_id} not found")
        row = dict(invite)
        # Yield after the read so concurrent accepts both see the invite pending.
        await asyncio.sleep(0)
        return row

    async def accept_invite(self, *, invite_id, accepted_by_id, type):
        # Mirrors the transaction: both writes land or neither does.
        invite = self.invites.get(invite_id)
        if invite is None or invite["accepted_at"] is not None:
            return None
        saved_invite, saved_connections = dict(invite), list(self.connections)

        invite["accepted_at"] = NOW
        row = {
            "id": self._next_id("con"),
            "user_first_id": invite["user_id"],
            "user_second_id": accepted_by_id,
            "type": type,
            "created_at": NOW,
        }
        self.connections.append(row)

        if self.accept_failure is not None:
            failure, self.accept_failure = self.accept_failure, None
            self.invites[invite_id] = saved_invite
            self.connections = saved_connections
            raise failure

        self.writes.append("accept_invite")
        return dict(row)

    async def delete_invite(self, invite_id):
        if self.delete_failure is not None:
            raise self.delete_failure
        self.writes.append("delete_invite")
        self.invites.pop(invite_id, None)

    async def get_connections(self, user_id):
        return [
            dict(c)
            for c in self.connections
            if user_id in (c["user_first_id"], c["user_second_id"])
        ]

    # core.email

    async def send_email(self, *, to, subject, html):
        if self.email_failure is not None:
            raise self.email_failure
        self.emails.append({"to": to, "subject": subject, "html": html})


@pytest.fixture(name="store")
def store_fixture(monkeypatch):
    store = FakeStore()
    for name in ("get_user", "get_user_by_auth_id", "create_user"):
        monkeypatch.setattr(users_repository, name, getattr(store, name))
    for name in ("get_note_by_id", "update_note", "delete_note"):
        monkeypatch.setattr(notes_repository, name, getattr(store, name))
    for name in (
        "create_invite",
        "get_invite",
        "accept_invite",
        "delete_invite",
        "get_connections",
    ):
        monkeypatch.setattr(invites_repository, name, getattr(store, name))
    monkeypatch.setattr(email, "send_email", store.send_email)
    return store


@pytest.fixture(name="client")
def client_fixture(store):
    from main import app

    async def override_current_user():
        return await store.get_user(store.current_user_id)

    app.dependency_overrides[auth_dependencies.get_current_user] = override_current_user
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="alice_and_bob")
def alice_and_bob_fixture(store):
    """Alice owns board brd_a with note nte_a; Bob owns brd_b with nte_b."""
    store.add_user("usr_alice", email="alice@example.com", board_ids=["brd_a"])
    store.add_user("usr_bob", email="bob@example.com", board_ids=["brd_b"])
    store.add_note("nte_a", board_id="brd_a")
    store.add_note("nte_b", board_id="brd_b")
    store.current_user_id = "usr_alice"
    return store
