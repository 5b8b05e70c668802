"""
Service container for the SkillSwap client.

This module provides the "container" that wires together all module
implementations. It is the single owner of the shared objects: one API
client, one query cache, one notifier, and exactly one auth session
store, all injected into the services that need them.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.cache import QueryCache
    from shared.http import ApiClient
    from shared.local_storage import LocalStorage
    from shared.notifications import Notifier
    from modules.auth.models import AuthSession
    from modules.auth.service import AuthSessionStore
    from modules.profiles.service import ProfileService
    from modules.swaps.edit_form import EditSwapRequestForm
    from modules.swaps.service import SwapRequestService
    from modules.verification.pending_store import PendingVerificationStore
    from modules.verification.service import OtpVerificationFlow

logger = logging.getLogger(__name__)

SESSION_COOKIES_KEY = "sessionCookies"


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        api: "ApiClient | None" = None,
        storage: "LocalStorage | None" = None,
    ) -> None:
        self._settings = settings
        self._api = api
        self._storage = storage
        self._cache: "QueryCache | None" = None
        self._notifier: "Notifier | None" = None
        self._auth: "AuthSessionStore | None" = None
        self._swaps: "SwapRequestService | None" = None
        self._profiles: "ProfileService | None" = None
        self._pending: "PendingVerificationStore | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def storage(self) -> "LocalStorage":
        """Get the client-local storage."""
        if self._storage is None:
            from shared.local_storage import LocalStorage
            self._storage = LocalStorage(self.settings.local_storage_path)
        return self._storage

    @property
    def api(self) -> "ApiClient":
        """Get the API client, restoring saved session cookies."""
        if self._api is None:
            from shared.http import ApiClient
            cookies = self.storage.get_item(SESSION_COOKIES_KEY) or None
            self._api = ApiClient(
                base_url=self.settings.api_base_url,
                timeout=self.settings.request_timeout,
                cookies=cookies,
            )
        return self._api

    @property
    def cache(self) -> "QueryCache":
        if self._cache is None:
            from shared.cache import QueryCache
            self._cache = QueryCache()
        return self._cache

    @property
    def notifier(self) -> "Notifier":
        if self._notifier is None:
            from shared.notifications import Notifier
            self._notifier = Notifier()
        return self._notifier

    @property
    def auth(self) -> "AuthSessionStore":
        """Get the auth session store instance."""
        if self._auth is None:
            from modules.auth.service import AuthSessionStore
            self._auth = AuthSessionStore(self.api)
            self._auth.subscribe(self._on_session_change)
        return self._auth

    @property
    def swaps(self) -> "SwapRequestService":
        """Get the swap request service instance."""
        if self._swaps is None:
            from modules.swaps.service import SwapRequestService
            self._swaps = SwapRequestService(self.api, self.cache)
        return self._swaps

    @property
    def profiles(self) -> "ProfileService":
        """Get the profile service instance."""
        if self._profiles is None:
            from modules.profiles.service import ProfileService
            self._profiles = ProfileService(self.api, self.cache)
        return self._profiles

    @property
    def pending_verifications(self) -> "PendingVerificationStore":
        if self._pending is None:
            from modules.verification.pending_store import PendingVerificationStore
            self._pending = PendingVerificationStore(self.storage)
        return self._pending

    def _on_session_change(self, session: "AuthSession") -> None:
        # Cached queries belong to the previous user
        if session.user is None and not session.is_loading:
            self.cache.clear()

    def edit_swap_request_form(
        self,
        on_open_change: Optional[Callable[[bool], None]] = None,
    ) -> "EditSwapRequestForm":
        """Create an edit dialog bound to the shared services."""
        from modules.swaps.edit_form import EditSwapRequestForm
        return EditSwapRequestForm(self.swaps, self.notifier, on_open_change=on_open_change)

    def verification_flow(
        self,
        email: Optional[str] = None,
        name: Optional[str] = None,
        on_complete: Optional[Callable[[], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> "OtpVerificationFlow | None":
        """
        Create the verification flow for an explicit or pending email.

        Returns:
            The flow, or None when there is nothing to verify
        """
        from modules.verification.service import open_pending_verification
        return open_pending_verification(
            self.pending_verifications,
            api=self.api,
            auth=self.auth,
            notifier=self.notifier,
            email=email,
            name=name,
            on_complete=on_complete,
            on_cancel=on_cancel,
            settings=self.settings,
        )

    async def startup(self) -> None:
        """Run the initial session check."""
        await self.auth.check_session()

    def save_session(self) -> None:
        """Persist the API session cookies to client-local storage."""
        if self._api is None:
            return
        cookies = self._api.cookies
        if cookies:
            self.storage.set_item(SESSION_COOKIES_KEY, cookies)
        else:
            self.storage.remove_item(SESSION_COOKIES_KEY)

    async def aclose(self) -> None:
        """Persist the session and close the API client."""
        if self._api is not None:
            self.save_session()
            await self._api.aclose()
        self.reset()

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._api = None
        self._cache = None
        self._notifier = None
        self._auth = None
        self._swaps = None
        self._profiles = None
        self._pending = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None
