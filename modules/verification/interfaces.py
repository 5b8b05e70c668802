"""
Verification module interface.

Front ends drive an IVerificationFlow; they never touch the timer or
the API directly.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import UserIdentity

from .models import VerificationSession, VerificationState


@runtime_checkable
class IVerificationFlow(Protocol):
    """
    Interface for one email verification session.

    This protocol defines the affordances a verification screen needs:
    what is enabled, and the three user actions.
    """

    @property
    def session(self) -> VerificationSession:
        """Current session state."""
        ...

    @property
    def state(self) -> VerificationState:
        """Derived state of the session."""
        ...

    @property
    def can_submit(self) -> bool:
        """Whether the verify control is enabled."""
        ...

    @property
    def can_resend(self) -> bool:
        """Whether the resend control is enabled."""
        ...

    def enter_code(self, code: str) -> None:
        """Replace the digits entered so far."""
        ...

    async def submit_code(self, code: Optional[str] = None) -> Optional[UserIdentity]:
        """
        Verify the entered code.

        Returns:
            The verified user when the API returned one

        Raises:
            ValidationError: If a precondition fails (no request is sent)
            RequestFailure: If the API rejects the code
        """
        ...

    async def resend(self) -> None:
        """
        Request a new code and restart the countdown.

        Raises:
            ResendNotAllowedError: During the cooldown (no request is sent)
            RequestFailure: If the API fails to send the code
        """
        ...

    def cancel(self) -> None:
        """Abandon the verification. Never calls the API."""
        ...

    def close(self) -> None:
        """Release the countdown without firing any callback."""
        ...
