"""
Profiles module data models.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from shared.models import UserIdentity


class Skill(BaseModel):
    """A skill from the shared catalog."""

    id: int
    name: str
    category: str = Field(default="Other")

    model_config = ConfigDict(frozen=True, extra="ignore")


class Availability(BaseModel):
    """When a user is available, e.g. dates=["weekends"], times=["evening"]."""

    dates: list[str] = Field(default_factory=list)
    times: list[str] = Field(default_factory=list)


class UserProfile(UserIdentity):
    """A user as shown on the profile page, with skills and availability."""

    bio: Optional[str] = None
    availability: Any = Field(None, description="Availability object, legacy list, or JSON string")
    rating: Optional[float] = Field(None, description="Average rating (API sends '4.50')")
    review_count: Optional[int] = Field(default=0, alias="reviewCount")
    skills_offered: list[Skill] = Field(default_factory=list, alias="skillsOffered")
    skills_wanted: list[Skill] = Field(default_factory=list, alias="skillsWanted")

    @property
    def offered_skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills_offered]

    @property
    def wanted_skill_names(self) -> list[str]:
        return [skill.name for skill in self.skills_wanted]


class UserPage(BaseModel):
    """One page of the user directory from GET /api/users."""

    data: list[UserProfile] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount")
    total_pages: int = Field(default=1, alias="totalPages")
    current_page: int = Field(default=1, alias="currentPage")
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    has_previous_page: bool = Field(default=False, alias="hasPreviousPage")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FeedbackRater(BaseModel):
    """The user who left a piece of feedback."""

    id: Optional[str] = None
    name: str
    profile_photo: Optional[str] = Field(None, alias="profilePhoto")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Feedback(BaseModel):
    """A rating left for a user after a swap."""

    id: str
    rating: int = Field(..., ge=1, le=5)
    feedback: Optional[str] = None
    rating_type: Optional[str] = Field(None, alias="ratingType", description="post_request or completed")
    created_at: Optional[str] = Field(None, alias="createdAt")
    rater: Optional[FeedbackRater] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def rater_name(self) -> str:
        return self.rater.name if self.rater is not None else "Anonymous"

    @property
    def stage(self) -> str:
        return "Initial" if self.rating_type == "post_request" else "Completed"
