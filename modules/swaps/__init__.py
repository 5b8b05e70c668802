"""
Swap requests module.

Listing, creating, editing, and resolving swap requests, plus the state
of the edit dialog.

Public API:
- ISwapRequestService: Interface for swap request operations
- SwapRequest, SwapRequestEdit, SwapStatus: Models
- EditSwapRequestForm: Edit dialog state
- Swap exceptions: SwapRequestValidationError, DialogClosedError
"""

from .interfaces import ISwapRequestService
from .models import (
    SwapRequest,
    SwapRequestEdit,
    SwapStatus,
    CreateSwapRequest,
    UpdateStatusRequest,
    split_skills,
    join_skills,
)
from .edit_form import EditSwapRequestForm
from .exceptions import (
    SwapRequestValidationError,
    DialogClosedError,
    SubmissionInProgressError,
)

__all__ = [
    # Interface
    "ISwapRequestService",
    # Models
    "SwapRequest",
    "SwapRequestEdit",
    "SwapStatus",
    "CreateSwapRequest",
    "UpdateStatusRequest",
    "split_skills",
    "join_skills",
    # Form
    "EditSwapRequestForm",
    # Exceptions
    "SwapRequestValidationError",
    "DialogClosedError",
    "SubmissionInProgressError",
]
