"""Domain exceptions raised by the service layer."""

from typing import Optional


class DiabfitError(Exception):
    """Base error; carries the HTTP status the API layer should answer with."""

    status_code: int = 400
    error: str = "bad_request"

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(DiabfitError):
    status_code = 404
    error = "not_found"


class AuthenticationError(DiabfitError):
    status_code = 401
    error = "authentication_failed"


class EmailNotConfirmedError(DiabfitError):
    status_code = 403
    error = "email_not_confirmed"


class ConflictError(DiabfitError):
    status_code = 409
    error = "conflict"


class ValidationFailedError(DiabfitError):
    status_code = 422
    error = "validation_failed"
