"""Display formatting for profile fields."""

import json
from typing import Any

from .models import Availability

NOT_SPECIFIED = "Not specified"


def capitalize_first(value: str) -> str:
    """Upper-case the first character only: "weekends" -> "Weekends"."""
    return value[:1].upper() + value[1:]


def _join_capitalized(items: Any) -> str:
    if not isinstance(items, list):
        return ""
    return ", ".join(capitalize_first(str(item)) for item in items)


def format_availability(availability: Any) -> str:
    """
    Render a user's availability for the profile page.

    Accepts the structured form ({"dates": [...], "times": [...]}), the
    legacy list form, or either of those serialized as a JSON string.
    A string that is not JSON is shown as is.

    Examples:
        {"dates": ["weekends"], "times": ["morning", "evening"]}
            -> "Weekends (Morning, Evening)"
        ["weekdays", "evenings"] -> "Weekdays, Evenings"
    """
    if not availability:
        return NOT_SPECIFIED

    if isinstance(availability, Availability):
        availability = availability.model_dump()

    if isinstance(availability, dict):
        parts = []
        dates = _join_capitalized(availability.get("dates"))
        if dates:
            parts.append(dates)
        times = _join_capitalized(availability.get("times"))
        if times:
            parts.append(f"({times})")
        return " ".join(parts) if parts else NOT_SPECIFIED

    if isinstance(availability, list):
        return _join_capitalized(availability) or NOT_SPECIFIED

    if isinstance(availability, str):
        try:
            parsed = json.loads(availability)
        except ValueError:
            return availability
        return format_availability(parsed)

    return NOT_SPECIFIED


def format_rating(rating: float | None, review_count: int | None) -> str:
    """Render a rating line such as "4.5 (12 reviews)"."""
    return f"{(rating or 0):.1f} ({review_count or 0} reviews)"
