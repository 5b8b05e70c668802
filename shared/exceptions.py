"""
Base exception classes for the SkillSwap client.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class SkillSwapError(Exception):
    """
    Base exception for all SkillSwap client errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for display or logging."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(SkillSwapError):
    """Resource not found."""

    pass


class ValidationError(SkillSwapError):
    """
    Local input validation failed.

    Raised before any network call is issued; the triggering action
    is simply blocked.
    """

    pass


class AuthenticationError(SkillSwapError):
    """Authentication failed (login or signup rejected)."""

    pass


class SilentUnauthenticatedError(AuthenticationError):
    """
    The current session is not authenticated.

    This is the expected "logged out" path of the initial session check
    and is never surfaced to the user.
    """

    def __init__(self, message: str = "Not authenticated", status_code: Optional[int] = None):
        super().__init__(
            message,
            code="UNAUTHENTICATED",
            details={"status_code": status_code} if status_code is not None else None,
        )
        self.status_code = status_code


class ExternalServiceError(SkillSwapError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class RequestFailure(ExternalServiceError):
    """
    The SkillSwap API rejected a request or could not be reached.

    The message is the server-provided one when the response carried it,
    otherwise the caller's fallback. status_code is None for transport errors.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if method and path:
            details["request"] = f"{method} {path}"
        super().__init__(
            message,
            service="skillswap-api",
            code="REQUEST_FAILED",
            details=details,
        )
        self.status_code = status_code
        self.method = method
        self.path = path
