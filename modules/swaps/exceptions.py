"""
Swap requests module exceptions.
"""

from shared.exceptions import ValidationError


class SwapRequestValidationError(ValidationError):
    """Raised when a swap request is missing required skills."""

    def __init__(self, missing: list[str]):
        super().__init__(
            "You must select at least one skill you offer and one skill you want.",
            code="SWAP_REQUEST_INVALID",
            details={"missing": missing},
        )
        self.missing = missing


class DialogClosedError(ValidationError):
    """Raised when the edit form is used while it is closed."""

    def __init__(self) -> None:
        super().__init__(
            "The edit dialog is not open",
            code="DIALOG_CLOSED",
        )


class SubmissionInProgressError(ValidationError):
    """Raised when the edit form is submitted twice concurrently."""

    def __init__(self, request_id: str):
        super().__init__(
            f"An update for swap request {request_id} is already in progress",
            code="SUBMISSION_IN_PROGRESS",
            details={"request_id": request_id},
        )
