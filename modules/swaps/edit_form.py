"""
Edit-swap-request form state.

The three editable fields are seeded from the target swap request only
when the dialog goes from closed to open. Re-opening an already open
dialog leaves in-progress edits alone; closing discards them.
"""

import logging
from typing import Callable, Optional

from shared.exceptions import RequestFailure
from shared.notifications import Notifier

from .interfaces import ISwapRequestService
from .models import SwapRequest, SwapRequestEdit, join_skills, missing_skill_fields
from .exceptions import (
    DialogClosedError,
    SubmissionInProgressError,
    SwapRequestValidationError,
)

logger = logging.getLogger(__name__)


class EditSwapRequestForm:
    """Dialog state for editing one pending swap request."""

    def __init__(
        self,
        service: ISwapRequestService,
        notifier: Optional[Notifier] = None,
        on_open_change: Optional[Callable[[bool], None]] = None,
    ):
        self._service = service
        self._notifier = notifier or Notifier()
        self._on_open_change = on_open_change

        self._is_open = False
        self._request: Optional[SwapRequest] = None
        self._values = SwapRequestEdit()
        self._submitting = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def request(self) -> Optional[SwapRequest]:
        return self._request

    @property
    def values(self) -> SwapRequestEdit:
        return self._values

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        return (
            self._is_open
            and not self._submitting
            and not missing_skill_fields(self._values.sender_skill, self._values.receiver_skill)
        )

    # -- open / close -----------------------------------------------------

    def open(self, request: SwapRequest) -> bool:
        """
        Open the dialog for request.

        Returns:
            True if this was a closed-to-open transition and the fields
            were seeded, False if the dialog was already open
        """
        if self._is_open:
            return False

        self._request = request
        self._values = SwapRequestEdit.from_request(request)
        self._is_open = True
        logger.debug(f"Editing swap request {request.id}")
        if self._on_open_change is not None:
            self._on_open_change(True)
        return True

    def close(self) -> None:
        """Close the dialog, discarding any uncommitted edits."""
        if not self._is_open:
            return
        self._is_open = False
        self._request = None
        self._values = SwapRequestEdit()
        if self._on_open_change is not None:
            self._on_open_change(False)

    def set_open(self, is_open: bool, request: Optional[SwapRequest] = None) -> None:
        """Single entry point for open-state changes coming from a front end."""
        if is_open:
            if request is None:
                raise ValueError("A swap request is required to open the dialog")
            self.open(request)
        else:
            self.close()

    # -- field edits ------------------------------------------------------

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise DialogClosedError()

    def _update(self, **fields: str) -> None:
        self._ensure_open()
        self._values = self._values.model_copy(update=fields)

    def set_sender_skill(self, value: str) -> None:
        self._update(sender_skill=value)

    def set_receiver_skill(self, value: str) -> None:
        self._update(receiver_skill=value)

    def set_message(self, value: str) -> None:
        self._update(message=value)

    @staticmethod
    def _toggled(skills: list[str], name: str) -> list[str]:
        if name in skills:
            return [skill for skill in skills if skill != name]
        return skills + [name]

    def toggle_sender_skill(self, name: str) -> None:
        self.set_sender_skill(join_skills(self._toggled(self._values.sender_skills, name)))

    def toggle_receiver_skill(self, name: str) -> None:
        self.set_receiver_skill(join_skills(self._toggled(self._values.receiver_skills, name)))

    def remove_sender_skill(self, name: str) -> None:
        skills = [skill for skill in self._values.sender_skills if skill != name]
        self.set_sender_skill(join_skills(skills))

    def remove_receiver_skill(self, name: str) -> None:
        skills = [skill for skill in self._values.receiver_skills if skill != name]
        self.set_receiver_skill(join_skills(skills))

    # -- submit -----------------------------------------------------------

    def validate(self) -> None:
        """
        Check the required fields.

        Raises:
            SwapRequestValidationError: If either skill field is empty
        """
        missing = missing_skill_fields(self._values.sender_skill, self._values.receiver_skill)
        if missing:
            raise SwapRequestValidationError(missing)

    async def submit(self) -> SwapRequest:
        """
        Send the edits as a partial update.

        On success the dialog closes. On failure it stays open with the
        edits intact.

        Raises:
            DialogClosedError: If the dialog is not open
            SwapRequestValidationError: If a skill field is empty (no request is sent)
            RequestFailure: If the API rejects the update
        """
        request = self._request
        if not self._is_open or request is None:
            raise DialogClosedError()
        if self._submitting:
            raise SubmissionInProgressError(request.id)

        try:
            self.validate()
        except SwapRequestValidationError as e:
            self._notifier.error("Please select skills", e.message)
            raise

        self._submitting = True
        try:
            updated = await self._service.update_swap_request(request.id, self._values)
        except RequestFailure as e:
            self._notifier.error("Failed to update request", e.message)
            raise
        finally:
            self._submitting = False

        self._notifier.success("Request updated successfully")
        if self._is_open and self._request is request:
            self.close()
        return updated
