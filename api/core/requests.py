"""
Request body parsing that reports failures as `ValidationError`.
"""

from __future__ import annotations

import json
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from .errors import VALIDATION_ERROR, create_error

ModelT = TypeVar("ModelT", bound=BaseModel)


async def parse_request(request: Request, schema: type[ModelT], message: str) -> ModelT:
    """
    Read the JSON body and validate it against `schema`.

    Malformed JSON and schema mismatches both raise a `ValidationError` server
    error carrying `message`, so callers can reject a request before touching
    the database.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise create_error(VALIDATION_ERROR, message) from exc

    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise create_error(VALIDATION_ERROR, message) from exc
