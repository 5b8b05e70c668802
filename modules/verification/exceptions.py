"""
Verification module exceptions.

All of these are local precondition failures: they are raised before
any request is sent.
"""

from shared.exceptions import SkillSwapError, ValidationError


class VerificationError(SkillSwapError):
    """Base exception for verification-related errors."""

    pass


class InvalidCodeError(ValidationError):
    """Raised when a code is not exactly the expected number of digits."""

    def __init__(self, code: str, length: int = 6):
        super().__init__(
            f"Verification code must be exactly {length} digits",
            code="INVALID_CODE",
            details={"length": len(code), "expected_length": length},
        )


class CodeEntryLockedError(ValidationError):
    """Raised when code entry is disabled (expired, submitting, or finished)."""

    def __init__(self, state: str):
        super().__init__(
            f"Code entry is disabled while the session is {state}",
            code="CODE_ENTRY_LOCKED",
            details={"state": state},
        )


class VerificationInProgressError(ValidationError):
    """Raised when a submit is attempted while another is in flight."""

    def __init__(self) -> None:
        super().__init__(
            "A verification attempt is already in progress",
            code="VERIFICATION_IN_PROGRESS",
        )


class ResendNotAllowedError(ValidationError):
    """Raised when a resend is attempted during the cooldown."""

    def __init__(self, remaining_seconds: int, reason: str = "cooldown"):
        super().__init__(
            f"A new code cannot be requested yet ({reason})",
            code="RESEND_NOT_ALLOWED",
            details={"remaining_seconds": remaining_seconds, "reason": reason},
        )


class VerificationClosedError(VerificationError):
    """Raised when a finished or torn-down session is used again."""

    def __init__(self, state: str):
        super().__init__(
            f"Verification session is {state}",
            code="VERIFICATION_CLOSED",
            details={"state": state},
        )
