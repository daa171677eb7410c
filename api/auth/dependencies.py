"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Header

from core.errors import AUTHENTICATION_ERROR, create_error
from users import service as users_service

from . import security


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise create_error(AUTHENTICATION_ERROR, "Missing Authorization header.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise create_error(AUTHENTICATION_ERROR, "Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise create_error(AUTHENTICATION_ERROR, "Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(access_token: str = Depends(get_bearer_token)) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise create_error(AUTHENTICATION_ERROR, str(exc)) from exc

    return await users_service.get_or_create_user_by_auth(
        access_token=access_token,
        auth_id=str(payload["sub"]).strip(),
    )
