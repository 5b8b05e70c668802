"""
Auth session store implementation.

Holds the current user for the lifetime of the process. Every mutation
goes through the API first and only touches local state on success,
except logout, which always clears the session.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from shared.exceptions import RequestFailure, SilentUnauthenticatedError
from shared.http import ApiClient
from shared.models import UserIdentity

from .interfaces import IAuthSessionStore, SessionListener
from .models import AuthSession, LoginRequest, SignupRequest
from .exceptions import (
    InvalidCredentialsFormatError,
    LoginFailedError,
    SignupFailedError,
)

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)


def parse_identity(body: Any) -> UserIdentity:
    """
    Parse a user from an auth response.

    Login and signup return the user itself; verify-otp wraps it in {user}.
    """
    if isinstance(body, dict) and isinstance(body.get("user"), dict):
        body = body["user"]
    return UserIdentity.model_validate(body)


def build_request(model: type[RequestT], **fields: Any) -> RequestT:
    """
    Validate login/signup input locally before anything is sent.

    Raises:
        InvalidCredentialsFormatError: For the first field that fails
    """
    try:
        return model(**fields)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or "input"
        raise InvalidCredentialsFormatError(field, error.get("msg", "invalid value"))


class AuthSessionStore(IAuthSessionStore):
    """
    Implementation of the auth session store.

    One instance is owned by the service container and injected into
    every consumer, so no component can hold a stale copy of the user.
    """

    def __init__(self, api: ApiClient):
        self._api = api
        self._session = AuthSession()
        self._listeners: list[SessionListener] = []

    @property
    def session(self) -> AuthSession:
        return self._session

    @property
    def user(self) -> Optional[UserIdentity]:
        return self._session.user

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    @property
    def is_loading(self) -> bool:
        return self._session.is_loading

    def _update(self, user: Optional[UserIdentity], is_loading: bool = False) -> None:
        self._session = AuthSession(user=user, is_loading=is_loading)
        for listener in list(self._listeners):
            listener(self._session)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def fetch_current_user(self) -> UserIdentity:
        """
        Ask the API who the session belongs to.

        Raises:
            SilentUnauthenticatedError: If there is no usable session
        """
        response = await self._api.request("GET", "/api/auth/me")
        if not response.is_success:
            raise SilentUnauthenticatedError(status_code=response.status_code)
        try:
            return parse_identity(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise SilentUnauthenticatedError(f"Malformed session response: {e}")

    async def check_session(self) -> Optional[UserIdentity]:
        """
        Populate the session from GET /api/auth/me.

        Any failure leaves the session empty; this is the normal
        logged-out path and is not reported to the user.
        """
        try:
            user = await self.fetch_current_user()
        except (SilentUnauthenticatedError, RequestFailure) as e:
            logger.debug(f"No active session: {e.message}")
            self._update(None)
            return None

        logger.info(f"Restored session for {user.email}")
        self._update(user)
        return user

    async def login(self, email: str, password: str) -> UserIdentity:
        payload = build_request(LoginRequest, email=email, password=password)
        response = await self._api.request(
            "POST", "/api/auth/login", json=payload.model_dump()
        )
        if not response.is_success:
            raise LoginFailedError(status_code=response.status_code)

        user = parse_identity(response.json())
        logger.info(f"Logged in as {user.email}")
        self._update(user)
        return user

    async def signup(
        self,
        name: str,
        email: str,
        password: str,
        location: Optional[str] = None,
    ) -> UserIdentity:
        payload = build_request(
            SignupRequest, name=name, email=email, password=password, location=location
        )
        response = await self._api.request(
            "POST", "/api/auth/signup", json=payload.model_dump()
        )
        if not response.is_success:
            raise SignupFailedError(status_code=response.status_code)

        user = parse_identity(response.json())
        logger.info(f"Signed up as {user.email}")
        self._update(user)
        return user

    async def logout(self) -> None:
        """
        Log out on the server, then clear the local session.

        Server-side invalidation is best effort: the local session is
        cleared whatever the call returns.
        """
        try:
            response = await self._api.request("POST", "/api/auth/logout")
            if not response.is_success:
                logger.warning(f"Logout returned {response.status_code}, clearing session anyway")
        except (RequestFailure, httpx.HTTPError) as e:
            logger.warning(f"Logout request failed, clearing session anyway: {e}")
        finally:
            self._update(None)

    def set_user(self, user: Optional[UserIdentity]) -> None:
        self._update(user)

    def reset(self) -> None:
        """Forget the session without calling the API."""
        self._update(None, is_loading=True)
