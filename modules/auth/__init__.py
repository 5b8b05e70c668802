"""
Authentication module.

Owns the client-side auth session: initial session check, login,
signup, logout, and adopting an identity from email verification.

Public API:
- IAuthSessionStore: Interface for session operations
- AuthSession: Immutable session snapshot
- LoginRequest, SignupRequest: Request payloads
- Auth exceptions: LoginFailedError, SignupFailedError
"""

from .interfaces import IAuthSessionStore
from .models import AuthSession, LoginRequest, SignupRequest
from .exceptions import (
    InvalidCredentialsFormatError,
    LoginFailedError,
    SignupFailedError,
)

__all__ = [
    # Interface
    "IAuthSessionStore",
    # Models
    "AuthSession",
    "LoginRequest",
    "SignupRequest",
    # Exceptions
    "InvalidCredentialsFormatError",
    "LoginFailedError",
    "SignupFailedError",
]
