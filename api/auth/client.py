"""
Auth provider HTTP client.

Used endpoint:
- GET {AUTH_PROFILE_URL}  (Authorization: Bearer <access token>)
  -> {"id": "...", "email": "...", "given_name": "...", ...}
"""

from __future__ import annotations

import os
from typing import Any

import httpx
from pydantic import ValidationError

from .schemas import AuthUserProfile


class AuthClientError(RuntimeError):
    pass


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def auth_profile_url() -> str:
    url = os.environ.get("AUTH_PROFILE_URL", "").strip()
    if not url:
        raise AuthClientError("AUTH_PROFILE_URL is not set.")
    return url


def auth_timeout_s() -> float:
    return _env_float("AUTH_TIMEOUT_S", 10.0)


async def fetch_auth_user(*, access_token: str) -> AuthUserProfile:
    """
    Resolve an access token to the provider's user profile.
    """
    token = (access_token or "").strip()
    if not token:
        raise AuthClientError("Access token is empty.")

    try:
        async with httpx.AsyncClient(timeout=auth_timeout_s()) as client:
            resp = await client.get(
                auth_profile_url(),
                headers={"Authorization": f"Bearer {token}"},
            )
    except httpx.HTTPError as exc:
        raise AuthClientError(f"Auth profile request failed: {exc}") from exc

    if resp.status_code != 200:
        body = resp.text[:300]
        raise AuthClientError(f"Auth profile request failed: {resp.status_code} {body}")

    try:
        data: dict[str, Any] = resp.json()
    except ValueError as exc:
        raise AuthClientError("Auth provider returned invalid JSON.") from exc

    try:
        return AuthUserProfile.model_validate(data)
    except ValidationError as exc:
        raise AuthClientError("Auth provider returned an incomplete profile.") from exc
