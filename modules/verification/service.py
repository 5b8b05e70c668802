"""
OTP email verification flow.

Combines the countdown, the user's input, and the send-otp / verify-otp
results into the state a verification screen renders:

    entering --submit--> submitting --ok--> verified
        ^                    |
        |<------failure------+   (code cleared)
        |
        +--timer hits 0--> expired --resend ok--> entering (fresh timer)

Resend is also available while entering once the code is within the
last resend window of its lifetime.
"""

import logging
from typing import Any, Callable, Optional

from shared.config import Settings, get_settings
from shared.exceptions import RequestFailure
from shared.http import ApiClient
from shared.models import UserIdentity
from shared.notifications import Notifier

from modules.auth.interfaces import IAuthSessionStore

from .countdown import CountdownTimer, format_remaining
from .interfaces import IVerificationFlow
from .models import (
    TERMINAL_STATES,
    SendOtpRequest,
    VerificationSession,
    VerificationState,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from .exceptions import (
    CodeEntryLockedError,
    InvalidCodeError,
    ResendNotAllowedError,
    VerificationClosedError,
    VerificationInProgressError,
)
from .pending_store import PendingVerificationStore

logger = logging.getLogger(__name__)

SEND_OTP_PATH = "/api/auth/send-otp"
VERIFY_OTP_PATH = "/api/auth/verify-otp"


class OtpVerificationFlow(IVerificationFlow):
    """
    State machine for one email verification.

    Owns exactly one CountdownTimer. The timer starts with start() (or
    on entering the async context) and is cancelled by close(), cancel(),
    a successful verification, and before every restart.
    """

    def __init__(
        self,
        email: str,
        api: ApiClient,
        user_name: Optional[str] = None,
        auth: Optional[IAuthSessionStore] = None,
        notifier: Optional[Notifier] = None,
        on_complete: Optional[Callable[[], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the flow.

        Args:
            email: Address being verified.
            api: API client carrying the session cookies.
            user_name: Name passed along when a new code is requested.
            auth: Session store that adopts the verified user.
            notifier: Receives one notification per outcome.
            on_complete: Called exactly once after a successful verification.
            on_cancel: Called when the user cancels.
            settings: Timing and code-length settings.
        """
        settings = settings or get_settings()
        self._ttl = settings.otp_ttl_seconds
        self._resend_window = settings.otp_resend_window_seconds
        self._code_length = settings.otp_code_length

        self._api = api
        self._auth = auth
        self._notifier = notifier or Notifier()
        self._on_complete = on_complete
        self._on_cancel = on_cancel

        self._session = VerificationSession(
            email=email,
            user_name=user_name or None,
            remaining_seconds=self._ttl,
        )
        self._timer = CountdownTimer(
            duration=self._ttl,
            interval=settings.countdown_interval_seconds,
            on_tick=self._handle_tick,
            on_expire=self._handle_expire,
        )
        self._outcome: Optional[VerificationState] = None
        self._completed = False
        self._closed = False

    # -- derived state ----------------------------------------------------

    @property
    def session(self) -> VerificationSession:
        return self._session

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    @property
    def state(self) -> VerificationState:
        if self._outcome is not None:
            return self._outcome
        if self._session.verifying:
            return VerificationState.SUBMITTING
        if self._session.expired:
            return VerificationState.EXPIRED
        return VerificationState.ENTERING

    @property
    def remaining_seconds(self) -> int:
        return self._session.remaining_seconds

    @property
    def time_left(self) -> str:
        """Remaining time formatted as m:ss."""
        return format_remaining(self._session.remaining_seconds)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _code_is_complete(self, code: str) -> bool:
        return len(code) == self._code_length and code.isdigit()

    @property
    def can_submit(self) -> bool:
        return (
            not self._closed
            and self.state == VerificationState.ENTERING
            and self._code_is_complete(self._session.code)
        )

    @property
    def resend_cooldown_active(self) -> bool:
        return (
            not self._session.expired
            and self._session.remaining_seconds > self._resend_window
        )

    @property
    def can_resend(self) -> bool:
        return (
            not self._closed
            and self.state not in TERMINAL_STATES
            and not self._session.resending
            and not self.resend_cooldown_active
        )

    # -- timer callbacks --------------------------------------------------

    def _handle_tick(self, remaining: int) -> None:
        self._session.remaining_seconds = remaining

    def _handle_expire(self) -> None:
        self._session.expired = True
        logger.info(f"Verification code for {self._session.email} expired")

    # -- lifecycle --------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._outcome is not None:
            raise VerificationClosedError(self._outcome.value)
        if self._closed:
            raise VerificationClosedError("closed")

    def start(self) -> None:
        """Start the countdown. Must be called from a running event loop."""
        self._ensure_open()
        self._timer.start()

    def close(self) -> None:
        """
        Tear the flow down without firing callbacks.

        Responses that arrive afterwards are ignored.
        """
        self._timer.cancel()
        self._closed = True

    def cancel(self) -> None:
        if self._outcome is not None:
            return
        self._timer.cancel()
        self._outcome = VerificationState.CANCELLED
        self._closed = True
        logger.info(f"Verification for {self._session.email} cancelled")
        if self._on_cancel is not None:
            self._on_cancel()

    async def __aenter__(self) -> "OtpVerificationFlow":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    # -- user actions -----------------------------------------------------

    def enter_code(self, code: str) -> None:
        """
        Replace the entered code.

        Raises:
            CodeEntryLockedError: While expired, submitting, or finished
            InvalidCodeError: If code has non-digits or is too long
        """
        if self._closed:
            raise CodeEntryLockedError(self._outcome.value if self._outcome else "closed")
        if self.state != VerificationState.ENTERING:
            raise CodeEntryLockedError(self.state.value)
        if len(code) > self._code_length or (code and not code.isdigit()):
            raise InvalidCodeError(code, self._code_length)
        self._session.code = code

    async def submit_code(self, code: Optional[str] = None) -> Optional[UserIdentity]:
        self._ensure_open()
        if self._session.verifying:
            raise VerificationInProgressError()
        if self._session.expired:
            raise CodeEntryLockedError(VerificationState.EXPIRED.value)
        if code is not None:
            self.enter_code(code)
        if not self._code_is_complete(self._session.code):
            raise InvalidCodeError(self._session.code, self._code_length)

        request = VerifyOtpRequest(email=self._session.email, otp_code=self._session.code)
        self._session.verifying = True
        try:
            body = await self._api.post(
                VERIFY_OTP_PATH,
                json=request.to_payload(),
                fallback_message="Invalid verification code",
            )
        except RequestFailure as e:
            self._session.verifying = False
            if self._closed:
                logger.debug("Ignoring verify failure for a closed session")
                raise
            self._session.code = ""
            self._notifier.error("Verification failed", e.message)
            raise
        self._session.verifying = False

        if self._closed:
            logger.debug("Ignoring verify response for a closed session")
            return None

        response = VerifyOtpResponse.model_validate(body or {})
        self._timer.cancel()
        self._outcome = VerificationState.VERIFIED
        logger.info(f"Email {self._session.email} verified")

        if response.user is not None and self._auth is not None:
            self._auth.set_user(response.user)

        self._notifier.success(
            "Email verified!",
            "Your account has been successfully verified.",
        )
        self._complete()
        return response.user

    def _complete(self) -> None:
        if self._completed:
            return
        self._completed = True
        if self._on_complete is not None:
            self._on_complete()

    async def request_code(self) -> None:
        """
        Send a code without the cooldown check.

        Used when the screen itself is responsible for the first send.
        On success the countdown restarts and the entered code is cleared.
        """
        self._ensure_open()
        request = SendOtpRequest(email=self._session.email, user_name=self._session.user_name)
        self._session.resending = True
        try:
            await self._api.post(
                SEND_OTP_PATH,
                json=request.to_payload(),
                fallback_message="Failed to send verification code",
            )
        except RequestFailure as e:
            self._session.resending = False
            if not self._closed:
                self._notifier.error("Failed to send code", e.message)
            raise
        self._session.resending = False

        if self._closed:
            logger.debug("Ignoring send-otp response for a closed session")
            return

        self._timer.reset(self._ttl)
        self._session.remaining_seconds = self._ttl
        self._session.expired = False
        self._session.code = ""
        self._notifier.success(
            "Code sent!",
            "A new verification code has been sent to your email.",
        )

    async def resend(self) -> None:
        self._ensure_open()
        if self._session.resending:
            raise ResendNotAllowedError(self._session.remaining_seconds, reason="in_progress")
        if self.resend_cooldown_active:
            raise ResendNotAllowedError(self._session.remaining_seconds)
        await self.request_code()


def remember_pending_verification(
    store: PendingVerificationStore,
    email: str,
    name: Optional[str] = None,
) -> None:
    """Persist the verification so it can be resumed after a restart."""
    store.save(email, name)


def open_pending_verification(
    store: PendingVerificationStore,
    api: ApiClient,
    auth: Optional[IAuthSessionStore] = None,
    notifier: Optional[Notifier] = None,
    email: Optional[str] = None,
    name: Optional[str] = None,
    on_complete: Optional[Callable[[], None]] = None,
    on_cancel: Optional[Callable[[], None]] = None,
    settings: Optional[Settings] = None,
) -> Optional[OtpVerificationFlow]:
    """
    Build the verification flow for the verify-email screen.

    An explicit email/name wins over the stored one. Completing or
    cancelling the flow clears the stored keys before the caller's
    callbacks run.

    Returns:
        The flow, or None when there is nothing to verify
    """
    pending = store.load()
    email = email or (pending.email if pending else None)
    if not email:
        return None
    if name is None and pending is not None:
        name = pending.name

    def completed() -> None:
        store.clear()
        if on_complete is not None:
            on_complete()

    def cancelled() -> None:
        store.clear()
        if on_cancel is not None:
            on_cancel()

    return OtpVerificationFlow(
        email=email,
        user_name=name,
        api=api,
        auth=auth,
        notifier=notifier,
        on_complete=completed,
        on_cancel=cancelled,
        settings=settings,
    )
