"""
Swap requests service implementation.

Thin wrapper over the swap-request endpoints. The list is cached under
SWAP_REQUESTS_KEY and every successful mutation invalidates it.
"""

import logging
from typing import Optional

from shared.exceptions import RequestFailure
from shared.service_base import BaseApiService

from .interfaces import ISwapRequestService
from .models import (
    CreateSwapRequest,
    SwapRequest,
    SwapRequestEdit,
    SwapStatus,
    UpdateStatusRequest,
    missing_skill_fields,
)
from .exceptions import SwapRequestValidationError

logger = logging.getLogger(__name__)

SWAP_REQUESTS_KEY = "/api/swap-requests"
CREATE_FAILED_MESSAGE = "Failed to send swap request. Please try again."
UPDATE_FAILED_MESSAGE = "Failed to update request"
DELETE_FAILED_MESSAGE = "Failed to delete request"


class SwapRequestService(BaseApiService[SwapRequest], ISwapRequestService):
    """Swap request operations against the SkillSwap API."""

    model = SwapRequest

    def invalidate(self) -> None:
        """Drop the cached swap request list."""
        self._cache.invalidate(SWAP_REQUESTS_KEY)

    async def list_swap_requests(self, refresh: bool = False) -> list[SwapRequest]:
        if refresh:
            self.invalidate()

        async def fetch() -> list[SwapRequest]:
            data = await self._api.get(
                SWAP_REQUESTS_KEY,
                fallback_message="Failed to load swap requests",
            )
            return self._map_list(data)

        return await self._cache.get_or_fetch(SWAP_REQUESTS_KEY, fetch)

    async def create_swap_request(
        self,
        requester_id: str,
        target_id: str,
        sender_skill: Optional[str] = None,
        receiver_skill: Optional[str] = None,
        message: str = "",
    ) -> SwapRequest:
        missing = missing_skill_fields(sender_skill, receiver_skill)
        if missing:
            raise SwapRequestValidationError(missing)

        payload = CreateSwapRequest(
            requester_id=requester_id,
            target_id=target_id,
            sender_skill=sender_skill,
            receiver_skill=receiver_skill,
            message=message,
        )
        try:
            data = await self._api.post(
                SWAP_REQUESTS_KEY,
                json=payload.to_payload(),
                fallback_message=CREATE_FAILED_MESSAGE,
            )
        except RequestFailure as e:
            # Creation failures are reported generically, whatever the server said
            raise RequestFailure(
                CREATE_FAILED_MESSAGE,
                status_code=e.status_code,
                method=e.method,
                path=e.path,
            ) from e

        created = self._map(data)
        logger.info(f"Created swap request {created.id} to {target_id}")
        self.invalidate()
        return created

    async def update_swap_request(self, request_id: str, edit: SwapRequestEdit) -> SwapRequest:
        data = await self._api.patch(
            f"{SWAP_REQUESTS_KEY}/{request_id}",
            json=edit.to_payload(),
            fallback_message=UPDATE_FAILED_MESSAGE,
        )
        logger.info(f"Updated swap request {request_id}")
        self.invalidate()
        return self._map(data)

    async def update_status(self, request_id: str, status: SwapStatus) -> SwapRequest:
        data = await self._api.patch(
            f"{SWAP_REQUESTS_KEY}/{request_id}/status",
            json=UpdateStatusRequest(status=status).to_payload(),
            fallback_message=UPDATE_FAILED_MESSAGE,
        )
        logger.info(f"Swap request {request_id} is now {status.value}")
        self.invalidate()
        return self._map(data)

    async def delete_swap_request(self, request_id: str) -> None:
        await self._api.delete(
            f"{SWAP_REQUESTS_KEY}/{request_id}",
            fallback_message=DELETE_FAILED_MESSAGE,
        )
        logger.info(f"Deleted swap request {request_id}")
        self.invalidate()
