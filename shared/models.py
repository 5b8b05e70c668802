"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UserIdentity(BaseModel):
    """
    Represents a SkillSwap user as returned by the auth endpoints.

    The API speaks camelCase; fields are aliased so both the wire names
    and the Python names are accepted.
    """

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="User's email address")
    location: Optional[str] = Field(None, description="Free-form location")
    profile_photo: Optional[str] = Field(None, alias="profilePhoto", description="Photo URL")
    is_public: bool = Field(default=True, alias="isPublic")
    role: str = Field(default="user", description="user or admin")
    is_banned: bool = Field(default=False, alias="isBanned")

    model_config = ConfigDict(
        frozen=True,  # Make immutable for safety
        extra="ignore",  # Ignore extra fields from the API
        populate_by_name=True,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
