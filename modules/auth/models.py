"""
Authentication module data models.

These models define the request payloads sent to the auth endpoints
and the session snapshot exposed to other modules.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from shared.models import UserIdentity


class LoginRequest(BaseModel):
    """Body of POST /api/auth/login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=5, description="Account password")


class SignupRequest(BaseModel):
    """Body of POST /api/auth/signup."""

    name: str = Field(..., min_length=2, description="Display name")
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=6, description="Account password")
    location: Optional[str] = Field(None, description="Optional location")


class AuthSession(BaseModel):
    """
    Snapshot of the client-side session.

    is_loading stays True until the initial session check has settled.
    """

    user: Optional[UserIdentity] = Field(None, description="Current user, if any")
    is_loading: bool = Field(default=True)

    model_config = ConfigDict(frozen=True)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
