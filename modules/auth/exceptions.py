"""
Authentication module exceptions.

These exceptions are raised by the auth session store and can be caught
by front ends to show the appropriate message.
"""

from shared.exceptions import AuthenticationError, ValidationError


class InvalidCredentialsFormatError(ValidationError):
    """Raised when login/signup input fails local validation."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Invalid {field}: {reason}",
            code="INVALID_CREDENTIALS_FORMAT",
            details={"field": field, "reason": reason},
        )
        self.field = field


class LoginFailedError(AuthenticationError):
    """Raised when the API rejects a login attempt."""

    def __init__(self, message: str = "Login failed", status_code: int | None = None):
        super().__init__(
            message,
            code="LOGIN_FAILED",
            details={"status_code": status_code} if status_code is not None else None,
        )


class SignupFailedError(AuthenticationError):
    """Raised when the API rejects a signup attempt."""

    def __init__(self, message: str = "Signup failed", status_code: int | None = None):
        super().__init__(
            message,
            code="SIGNUP_FAILED",
            details={"status_code": status_code} if status_code is not None else None,
        )
