"""
Email verification module.

Drives the one-time-code verification of a new account: countdown,
code entry, verify, resend with cooldown, and resume after restart.

Public API:
- IVerificationFlow: Interface a verification screen drives
- VerificationSession, VerificationState: Session state
- CountdownTimer, format_remaining: Expiry countdown
- PendingVerificationStore: Persisted pending email/name
- Verification exceptions: InvalidCodeError, ResendNotAllowedError, etc.
"""

from .interfaces import IVerificationFlow
from .models import (
    VerificationSession,
    VerificationState,
    SendOtpRequest,
    VerifyOtpRequest,
    VerifyOtpResponse,
    PendingVerification,
)
from .countdown import CountdownTimer, format_remaining
from .pending_store import PendingVerificationStore
from .exceptions import (
    VerificationError,
    InvalidCodeError,
    CodeEntryLockedError,
    VerificationInProgressError,
    ResendNotAllowedError,
    VerificationClosedError,
)

__all__ = [
    # Interface
    "IVerificationFlow",
    # Models
    "VerificationSession",
    "VerificationState",
    "SendOtpRequest",
    "VerifyOtpRequest",
    "VerifyOtpResponse",
    "PendingVerification",
    # Timer
    "CountdownTimer",
    "format_remaining",
    # Persistence
    "PendingVerificationStore",
    # Exceptions
    "VerificationError",
    "InvalidCodeError",
    "CodeEntryLockedError",
    "VerificationInProgressError",
    "ResendNotAllowedError",
    "VerificationClosedError",
]
