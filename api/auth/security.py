"""
Access-token verification.

Tokens are issued by the external auth provider; this service only verifies
them and reads the `sub` claim (the provider's user id).
"""

from __future__ import annotations

import os
from typing import Any

import jwt


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set AUTH_JWT_SECRET in environment.
    return os.environ.get("AUTH_JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("AUTH_JWT_ALG", "HS256").strip() or "HS256"


def jwt_audience() -> str | None:
    return os.environ.get("AUTH_JWT_AUDIENCE", "").strip() or None


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    audience = jwt_audience()
    try:
        payload = jwt.decode(
            raw,
            jwt_secret(),
            algorithms=[jwt_algorithm()],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise AuthSecurityError("Access token has no subject.")

    return payload
