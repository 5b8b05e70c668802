"""
Shared infrastructure for the SkillSwap client.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- http: API client
- cache: Query cache with prefix invalidation
- notifications: Transient user notifications
- local_storage: Client-local key/value persistence
- exceptions: Base exception classes

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .http import ApiClient
from .cache import QueryCache
from .notifications import Notification, NotificationVariant, Notifier
from .local_storage import LocalStorage
from .exceptions import (
    SkillSwapError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    SilentUnauthenticatedError,
    ExternalServiceError,
    RequestFailure,
)
from .models import UserIdentity

__all__ = [
    "Settings",
    "get_settings",
    "ApiClient",
    "QueryCache",
    "Notification",
    "NotificationVariant",
    "Notifier",
    "LocalStorage",
    "SkillSwapError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "SilentUnauthenticatedError",
    "ExternalServiceError",
    "RequestFailure",
    "UserIdentity",
]
