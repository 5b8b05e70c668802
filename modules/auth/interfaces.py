"""
Authentication module interface.

Other modules should depend on IAuthSessionStore, not the concrete
implementation. This enables testing with mocks.
"""

from typing import Callable, Protocol, Optional, runtime_checkable

from shared.models import UserIdentity

from .models import AuthSession


SessionListener = Callable[[AuthSession], None]


@runtime_checkable
class IAuthSessionStore(Protocol):
    """
    Interface for the process-wide auth session.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    @property
    def user(self) -> Optional[UserIdentity]:
        """The current user, or None when logged out."""
        ...

    @property
    def session(self) -> AuthSession:
        """Immutable snapshot of the current session."""
        ...

    async def check_session(self) -> Optional[UserIdentity]:
        """
        Adopt the server-side session, if there is one.

        Never raises for an unauthenticated session; the store is simply
        left empty.
        """
        ...

    async def login(self, email: str, password: str) -> UserIdentity:
        """
        Log in with email and password.

        Raises:
            AuthenticationError: If the API rejects the credentials
        """
        ...

    async def signup(
        self,
        name: str,
        email: str,
        password: str,
        location: Optional[str] = None,
    ) -> UserIdentity:
        """
        Create an account and adopt its session.

        Raises:
            AuthenticationError: If the API rejects the signup
        """
        ...

    async def logout(self) -> None:
        """Log out. The local session is cleared even if the call fails."""
        ...

    def set_user(self, user: Optional[UserIdentity]) -> None:
        """Adopt an identity obtained elsewhere (e.g., OTP verification)."""
        ...

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Observe session changes. Returns an unsubscribe callable."""
        ...
