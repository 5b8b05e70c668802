"""
Profiles service implementation.

Profiles are cached per user id, directory pages per page and size, and
the skill catalog once; all change rarely enough that a stale read is
acceptable until invalidated. Search results are always fetched fresh.
"""

import logging
from typing import Any, Optional

from shared.exceptions import RequestFailure, ValidationError
from shared.service_base import BaseApiService

from .interfaces import IProfileService
from .models import Feedback, Skill, UserPage, UserProfile
from .exceptions import UserNotFoundError

logger = logging.getLogger(__name__)

USERS_KEY = "/api/users"
USER_SEARCH_KEY = "/api/users/search"
SKILLS_KEY = "/api/skills"
DEFAULT_PER_PAGE = 9


def _csv(values: Optional[list[str]]) -> str:
    return ",".join(value.strip() for value in values or [] if value.strip())


class ProfileService(BaseApiService[UserProfile], IProfileService):
    """Profile lookups against the SkillSwap API."""

    model = UserProfile

    async def get_user(self, user_id: str) -> UserProfile:
        key = f"{USERS_KEY}/{user_id}"

        async def fetch() -> UserProfile:
            try:
                data = await self._api.get(key, fallback_message="Failed to load user")
            except RequestFailure as e:
                if e.status_code == 404:
                    raise UserNotFoundError(user_id) from e
                raise
            return self._map(data)

        return await self._cache.get_or_fetch(key, fetch)

    async def list_users(self, page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> UserPage:
        """
        Get one page of the user directory.

        The API answers with a page envelope; a bare list is accepted too
        and treated as a single page.
        """
        if page < 1 or per_page < 1:
            raise ValidationError(
                "page and per_page must be at least 1",
                code="INVALID_PAGE",
                details={"page": page, "per_page": per_page},
            )

        key = f"{USERS_KEY}?page={page}&limit={per_page}"

        async def fetch() -> UserPage:
            data = await self._api.get(
                USERS_KEY,
                params={"page": page, "limit": per_page},
                fallback_message="Failed to fetch users",
            )
            if isinstance(data, list):
                users = self._map_list(data)
                return UserPage(data=users, total_count=len(users), current_page=page)
            return UserPage.model_validate(data or {})

        return await self._cache.get_or_fetch(key, fetch)

    async def search_users(
        self,
        term: str = "",
        skills: Optional[list[str]] = None,
        dates: Optional[list[str]] = None,
        times: Optional[list[str]] = None,
    ) -> list[UserProfile]:
        """
        Search the directory by free text, skill names, and availability.

        With no criteria at all nothing is sent and the result is empty.
        """
        params: dict[str, Any] = {}
        if term.strip():
            params["q"] = term.strip()
        for name, values in (("skills", skills), ("dates", dates), ("times", times)):
            joined = _csv(values)
            if joined:
                params[name] = joined

        if not params:
            return []

        logger.debug(f"Searching users with {params}")
        data = await self._api.get(
            USER_SEARCH_KEY,
            params=params,
            fallback_message="Failed to fetch filtered users",
        )
        return self._map_list(data)

    async def get_feedback(self, user_id: str) -> list[Feedback]:
        key = f"{USERS_KEY}/{user_id}/feedback"

        async def fetch() -> list[Feedback]:
            data = await self._api.get(key, fallback_message="Failed to load feedback")
            if not isinstance(data, list):
                return []
            return [Feedback.model_validate(item) for item in data]

        return await self._cache.get_or_fetch(key, fetch)

    async def list_skills(self) -> dict[str, list[Skill]]:
        async def fetch() -> dict[str, list[Skill]]:
            data = await self._api.get(SKILLS_KEY, fallback_message="Failed to fetch skills")
            if not isinstance(data, dict):
                return {}
            return {
                category: [Skill.model_validate(skill) for skill in skills]
                for category, skills in data.items()
                if isinstance(skills, list)
            }

        return await self._cache.get_or_fetch(SKILLS_KEY, fetch)

    def invalidate_user(self, user_id: str) -> None:
        """Drop the cached profile and feedback for one user."""
        self._cache.invalidate(f"{USERS_KEY}/{user_id}")
