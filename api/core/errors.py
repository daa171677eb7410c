"""
Tagged server errors and their HTTP translation.

Every service failure is a `ServerError` with a `kind` and a human-readable
`message`. Failures propagate unchanged until the HTTP boundary, where
`map_to_api_error` turns the kind into a status code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

VALIDATION_ERROR = "ValidationError"
AUTHENTICATION_ERROR = "AuthenticationError"
AUTHORIZATION_ERROR = "AuthorizationError"
RECORD_NOT_FOUND = "RecordNotFound"
FETCH_ERROR = "FetchError"
EMAIL_ERROR = "EmailError"
DATABASE_ERROR = "DatabaseError"

STATUS_BY_KIND: dict[str, int] = {
    VALIDATION_ERROR: 400,
    AUTHENTICATION_ERROR: 401,
    AUTHORIZATION_ERROR: 403,
    RECORD_NOT_FOUND: 404,
    FETCH_ERROR: 502,
    EMAIL_ERROR: 502,
    DATABASE_ERROR: 500,
}


class ServerError(Exception):
    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "message", message)

    def __setattr__(self, name: str, value: object) -> None:
        if name in ("kind", "message"):
            raise AttributeError(f"ServerError.{name} is read-only")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"ServerError(kind={self.kind!r}, message={self.message!r})"


@dataclass(frozen=True)
class ApiError:
    status: int
    message: str


def create_error(kind: str, message: str) -> ServerError:
    return ServerError(kind, message)


def with_error(kind: str, message: str) -> Callable[[BaseException], ServerError]:
    """
    Build a converter that drops an opaque failure in favour of a fixed error.

    Usage:
        _fetch_error = with_error("FetchError", "Failed to fetch user")
        try:
            ...
        except SomeClientError as exc:
            raise _fetch_error(exc) from exc
    """

    def convert(_: BaseException) -> ServerError:
        return create_error(kind, message)

    return convert


def map_to_api_error(err: ServerError) -> ApiError:
    return ApiError(status=STATUS_BY_KIND.get(err.kind, 500), message=err.message)
