"""
Transactional email over an HTTP email API.

Used endpoint:
- POST {EMAIL_API_URL}  {"from": ..., "to": [...], "subject": ..., "html": ...}
"""

from __future__ import annotations

import os

import httpx


# Email failures are explicit and separable from other runtime errors.
class EmailError(RuntimeError):
    pass


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def email_api_url() -> str:
    return os.environ.get("EMAIL_API_URL", "https://api.resend.com/emails").strip() or "https://api.resend.com/emails"


def email_api_key() -> str:
    return os.environ.get("EMAIL_API_KEY", "").strip()


def email_from() -> str:
    return os.environ.get("EMAIL_FROM", "Notes <notes@localhost>").strip() or "Notes <notes@localhost>"


def email_timeout_s() -> float:
    return _env_float("EMAIL_TIMEOUT_S", 15.0)


async def send_email(*, to: str, subject: str, html: str) -> None:
    to = (to or "").strip()
    if not to:
        raise EmailError("Email recipient is empty.")

    api_key = email_api_key()
    if not api_key:
        raise EmailError("EMAIL_API_KEY is not set.")

    payload = {"from": email_from(), "to": [to], "subject": subject, "html": html}
    try:
        async with httpx.AsyncClient(timeout=email_timeout_s()) as client:
            resp = await client.post(
                email_api_url(),
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
            )
    except httpx.HTTPError as exc:
        raise EmailError(f"Email request failed: {exc}") from exc

    if resp.status_code < 200 or resp.status_code >= 300:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:300]
        raise EmailError(f"Email request failed: {resp.status_code} {body}")
