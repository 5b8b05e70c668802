"""
Profiles module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Feedback, Skill, UserPage, UserProfile


@runtime_checkable
class IProfileService(Protocol):
    """Interface for profile browsing and skill catalog lookups."""

    async def get_user(self, user_id: str) -> UserProfile:
        """
        Get a user's public profile.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...

    async def list_users(self, page: int = 1, per_page: int = 9) -> UserPage:
        """
        Get one page of the user directory.

        Args:
            page: 1-based page number
            per_page: Users per page

        Returns:
            The page with its navigation counters
        """
        ...

    async def search_users(
        self,
        term: str = "",
        skills: Optional[list[str]] = None,
        dates: Optional[list[str]] = None,
        times: Optional[list[str]] = None,
    ) -> list[UserProfile]:
        """Search users by text, skill names, available dates and times."""
        ...

    async def get_feedback(self, user_id: str) -> list[Feedback]:
        """Get the ratings and comments left for a user."""
        ...

    async def list_skills(self) -> dict[str, list[Skill]]:
        """Get the skill catalog grouped by category."""
        ...
