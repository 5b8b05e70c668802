"""
Profiles module.

User directory browsing and search, profile lookups, feedback, the skill
catalog, and profile display formatting.

Public API:
- IProfileService: Interface for profile lookups
- UserProfile, UserPage, Feedback, Skill, Availability: Models
- format_availability, format_rating: Display helpers
- UserNotFoundError
"""

from .interfaces import IProfileService
from .models import UserProfile, UserPage, Feedback, Skill, Availability
from .formatting import format_availability, format_rating
from .exceptions import UserNotFoundError

__all__ = [
    # Interface
    "IProfileService",
    # Models
    "UserProfile",
    "UserPage",
    "Feedback",
    "Skill",
    "Availability",
    # Formatting
    "format_availability",
    "format_rating",
    # Exceptions
    "UserNotFoundError",
]
