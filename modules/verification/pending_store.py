"""
Pending verification persistence.

Signup stores the address being verified so that the verification
screen can be resumed after a restart. Both keys are cleared once the
verification completes or is cancelled.
"""

import logging
from typing import Optional

from shared.local_storage import LocalStorage

from .models import PendingVerification

logger = logging.getLogger(__name__)

EMAIL_KEY = "pendingVerificationEmail"
NAME_KEY = "pendingVerificationName"


class PendingVerificationStore:
    """Reads and writes the two pending-verification keys."""

    def __init__(self, storage: LocalStorage):
        self._storage = storage

    def load(self) -> Optional[PendingVerification]:
        """Return the pending verification, or None if no email is stored."""
        email = self._storage.get_item(EMAIL_KEY)
        if not email:
            return None
        name = self._storage.get_item(NAME_KEY) or None
        return PendingVerification(email=email, name=name)

    def save(self, email: str, name: Optional[str] = None) -> None:
        self._storage.set_item(EMAIL_KEY, email)
        if name:
            self._storage.set_item(NAME_KEY, name)
        else:
            self._storage.remove_item(NAME_KEY)
        logger.debug(f"Remembered pending verification for {email}")

    def clear(self) -> None:
        self._storage.remove_item(EMAIL_KEY)
        self._storage.remove_item(NAME_KEY)
