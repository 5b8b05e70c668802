"""
Verification module data models.

These models define the OTP verification session and the payloads
exchanged with the send-otp / verify-otp endpoints.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from shared.models import UserIdentity


class VerificationState(str, Enum):
    """Where a verification session stands."""

    ENTERING = "entering"      # Code can be typed and submitted
    SUBMITTING = "submitting"  # Verify request in flight
    EXPIRED = "expired"        # Timer reached 0, input locked until resend
    VERIFIED = "verified"      # Terminal: email confirmed
    CANCELLED = "cancelled"    # Terminal: user backed out


TERMINAL_STATES = frozenset({VerificationState.VERIFIED, VerificationState.CANCELLED})


class VerificationSession(BaseModel):
    """
    Mutable state of one email verification.

    expired flips to True exactly when remaining_seconds reaches 0 and
    stays True until a successful resend.
    """

    email: str = Field(..., description="Address being verified")
    user_name: Optional[str] = Field(None, description="Name used in the email greeting")
    code: str = Field(default="", description="Digits entered so far (0-6)")
    remaining_seconds: int = Field(default=600, ge=0)
    expired: bool = Field(default=False)
    verifying: bool = Field(default=False)
    resending: bool = Field(default=False)


class SendOtpRequest(BaseModel):
    """Body of POST /api/auth/send-otp."""

    email: str
    user_name: Optional[str] = Field(None, alias="userName")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class VerifyOtpRequest(BaseModel):
    """Body of POST /api/auth/verify-otp."""

    email: str
    otp_code: str = Field(..., alias="otpCode")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class VerifyOtpResponse(BaseModel):
    """Successful verify-otp response. The user is absent on older servers."""

    user: Optional[UserIdentity] = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class PendingVerification(BaseModel):
    """A verification that survives a restart via client-local storage."""

    email: str
    name: Optional[str] = None
