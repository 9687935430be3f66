"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Each error is tagged with an ErrorType; the API error handlers turn the tag
into an HTTP status code and a JSON error body.
"""

from enum import Enum


class ErrorType(Enum):
    """Error tags as (status, code, description)."""
    VALIDATION = (400, "VALIDATION_ERROR", "Invalid request")
    UNAUTHORIZED = (401, "UNAUTHORIZED_ERROR", "Unauthorized")
    INVALID_CREDENTIALS = (403, "INVALID_CREDENTIALS_ERROR", "Invalid credentials")
    INVALID_PASSWORD = (403, "INVALID_PASSWORD_ERROR", "Invalid password")
    NOT_FOUND = (404, "NOT_FOUND_ERROR", "Route or resource not found")
    EMAIL_ALREADY_TAKEN = (409, "EMAIL_ALREADY_TAKEN_ERROR", "Email is already registered")
    UNPROCESSABLE_ENTITY = (422, "UNPROCESSABLE_ENTITY_ERROR", "Unprocessable entity")
    SERVER = (500, "SERVER_ERROR", "Server error occurs")
    SERVICE_UNAVAILABLE = (503, "SERVICE_UNAVAILABLE_ERROR", "Service unavailable")

    @property
    def status(self) -> int:
        return self.value[0]

    @property
    def code(self) -> str:
        return self.value[1]

    @property
    def description(self) -> str:
        return self.value[2]


class DomainError(Exception):
    """Base class for all domain errors."""
    error_type: ErrorType = ErrorType.SERVER

    def __init__(self, message: str | None = None, error_type: ErrorType | None = None):
        if error_type is not None:
            self.error_type = error_type
        self.message = message or self.error_type.description
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Requested entity does not exist."""
    error_type = ErrorType.NOT_FOUND


class InvalidPasswordError(DomainError):
    """Password is too weak or does not match its confirmation."""
    error_type = ErrorType.INVALID_PASSWORD


class InvalidCredentialsError(DomainError):
    """Email/password pair does not identify a user."""
    error_type = ErrorType.INVALID_CREDENTIALS


class EmailAlreadyTakenError(DomainError):
    """Another user already owns this email."""
    error_type = ErrorType.EMAIL_ALREADY_TAKEN


class UnprocessableEntityError(DomainError):
    """The database refused or did not apply the requested change."""
    error_type = ErrorType.UNPROCESSABLE_ENTITY
