"""Application error taxonomy. Each error maps to one HTTP status and a JSON envelope."""

from typing import Any


class AppError(Exception):
    """Base for errors rendered as {status, message, ...extra} by the app's exception handler."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        extra: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra or {}
        self.headers = headers
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        return {"status": self.status_code, "message": self.message, **self.extra}


class InputValidationError(AppError):
    """Missing or malformed request input (400)."""

    status_code = 400
    default_message = "Invalid request body"


class MissingFieldsError(InputValidationError):
    """One or more required fields are absent or blank."""

    default_message = "Missing required fields"

    def __init__(self, missing_fields: list[str], message: str | None = None) -> None:
        self.missing_fields = missing_fields
        super().__init__(message, extra={"missingFields": missing_fields})


class ConflictError(AppError):
    """
    Uniqueness violation, from a pre-check or from a store constraint.

    field names the violated column when it is known (e.g. "email").
    """

    status_code = 409
    default_message = "Resource already exists"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.field = field
        super().__init__(message, status_code=status_code)


class AuthenticationError(AppError):
    """Missing or invalid credentials (401)."""

    status_code = 401
    default_message = "Not authenticated"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(AppError):
    """Valid identity without the required role or permission (403)."""

    status_code = 403
    default_message = "You do not have the required permission to perform this action"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class StoreError(AppError):
    """Unexpected persistence failure; the message is generic, details are only logged."""

    status_code = 500


class EmailDeliveryError(Exception):
    """Raised by the SMTP transport. Never surfaces to HTTP clients; callers log it."""

    def __init__(self, message: str, recipient: str | None = None) -> None:
        self.message = message
        self.recipient = recipient
        super().__init__(message)
