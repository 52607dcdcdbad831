"""
Application error taxonomy.

Services raise these; the API layer renders them as JSON with the status
code carried by each class.
"""

from typing import Any


class AppException(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_error_code = "APP_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {"error": self.error_code, "message": self.message, "details": self.details}


class ValidationError(AppException):
    """Malformed or missing input that passed schema parsing."""

    status_code = 422
    default_error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details={"field": field, **(details or {})})


class AuthError(AppException):
    """Bad credentials or bad token. Always 401; the cause is never exposed beyond the category."""

    status_code = 401
    default_error_code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Authentication failed", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class MissingTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("Not authenticated")


class ExpiredTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class InvalidSignatureError(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class RevokedTokenError(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired token")


class PermissionDeniedError(AppException):
    """Role or ownership mismatch."""

    status_code = 403
    default_error_code = "PERMISSION_DENIED"

    def __init__(self, message: str = "Access denied", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)


class NotFoundError(AppException):
    """Referenced record does not exist."""

    status_code = 404
    default_error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | int, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"{resource} with identifier '{identifier}' not found",
            details={"resource": resource, "identifier": str(identifier), **(details or {})},
        )


class ConflictError(AppException):
    """Uniqueness violation, e.g. an identity that is already registered."""

    status_code = 409
    default_error_code = "CONFLICT"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details=details)
