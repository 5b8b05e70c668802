"""
Swap requests module data models.

A swap request proposes trading skills the sender offers for skills the
receiver offers. Skill fields carry several skill names joined by ", ".
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from shared.models import UserIdentity


SKILL_SEPARATOR = ", "


def split_skills(value: Optional[str]) -> list[str]:
    """Split a ", "-joined skill field into names, dropping blanks."""
    if not value:
        return []
    return [skill.strip() for skill in value.split(SKILL_SEPARATOR) if skill.strip()]


def join_skills(skills: list[str]) -> str:
    return SKILL_SEPARATOR.join(skills)


def missing_skill_fields(sender_skill: Optional[str], receiver_skill: Optional[str]) -> list[str]:
    """Name the skill fields (by wire name) that are empty or blank."""
    missing = []
    if not split_skills(sender_skill):
        missing.append("senderSkill")
    if not split_skills(receiver_skill):
        missing.append("receiverSkill")
    return missing


class SwapStatus(str, Enum):
    """Swap request lifecycle status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class SwapRequest(BaseModel):
    """A persisted swap request, optionally with both users embedded."""

    id: str
    requester_id: str = Field(..., alias="requesterId")
    target_id: str = Field(..., alias="targetId")
    sender_skill: Optional[str] = Field(None, alias="senderSkill")
    receiver_skill: Optional[str] = Field(None, alias="receiverSkill")
    status: SwapStatus = Field(default=SwapStatus.PENDING)
    message: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    requester: Optional[UserIdentity] = None
    target: Optional[UserIdentity] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def sender_skills(self) -> list[str]:
        return split_skills(self.sender_skill)

    @property
    def receiver_skills(self) -> list[str]:
        return split_skills(self.receiver_skill)

    @property
    def is_pending(self) -> bool:
        return self.status == SwapStatus.PENDING


class SwapRequestEdit(BaseModel):
    """
    Editable copy of a swap request.

    Seeded from a SwapRequest and sent as the PATCH body; never written
    back to the source entity.
    """

    sender_skill: str = Field(default="", alias="senderSkill")
    receiver_skill: str = Field(default="", alias="receiverSkill")
    message: str = Field(default="")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_request(cls, request: SwapRequest) -> "SwapRequestEdit":
        return cls(
            sender_skill=request.sender_skill or "",
            receiver_skill=request.receiver_skill or "",
            message=request.message or "",
        )

    @property
    def sender_skills(self) -> list[str]:
        return split_skills(self.sender_skill)

    @property
    def receiver_skills(self) -> list[str]:
        return split_skills(self.receiver_skill)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class CreateSwapRequest(BaseModel):
    """Body of POST /api/swap-requests."""

    requester_id: str = Field(..., alias="requesterId")
    target_id: str = Field(..., alias="targetId")
    sender_skill: Optional[str] = Field(None, alias="senderSkill")
    receiver_skill: Optional[str] = Field(None, alias="receiverSkill")
    message: str = Field(default="")

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class UpdateStatusRequest(BaseModel):
    """Body of PATCH /api/swap-requests/{id}/status."""

    status: SwapStatus

    def to_payload(self) -> dict:
        return {"status": self.status.value}
