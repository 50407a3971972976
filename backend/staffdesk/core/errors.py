"""Error taxonomy shared by the repositories, the API and the client.

Every error carries the HTTP status it maps to and a short ``code`` that is
sent alongside the message, so the client can rebuild the same exception
type from a response body.
"""

from __future__ import annotations

from http import HTTPStatus


class StaffDeskError(Exception):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, str]:
        return {"detail": self.message, "code": self.code}


class ValidationError(StaffDeskError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "validation"


class ConflictError(StaffDeskError):
    status_code = HTTPStatus.BAD_REQUEST
    code = "conflict"


class NotFoundError(StaffDeskError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"


class AuthError(StaffDeskError):
    status_code = HTTPStatus.UNAUTHORIZED
    code = "auth"


class InvalidTokenError(AuthError):
    status_code = HTTPStatus.FORBIDDEN
    code = "invalid_token"


class InternalError(StaffDeskError):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    code = "internal"

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


ERRORS_BY_CODE: dict[str, type[StaffDeskError]] = {
    cls.code: cls
    for cls in (ValidationError, ConflictError, NotFoundError, AuthError, InvalidTokenError, InternalError)
}


def error_from_body(status_code: int, body: object) -> StaffDeskError:
    """Rebuild the exception an API response describes."""
    detail = None
    code = None
    if isinstance(body, dict):
        detail = body.get("detail")
        code = body.get("code")
    if status_code >= 500:
        return InternalError()
    cls = ERRORS_BY_CODE.get(code) if isinstance(code, str) else None
    if cls is None:
        cls = {
            HTTPStatus.UNAUTHORIZED: AuthError,
            HTTPStatus.FORBIDDEN: InvalidTokenError,
            HTTPStatus.NOT_FOUND: NotFoundError,
        }.get(status_code, ValidationError)
    return cls(detail if isinstance(detail, str) and detail else "Request failed")
