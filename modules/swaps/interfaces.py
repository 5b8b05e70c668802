"""
Swap requests module interface.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import SwapRequest, SwapRequestEdit, SwapStatus


@runtime_checkable
class ISwapRequestService(Protocol):
    """
    Interface for swap request operations.

    Every successful mutation invalidates the cached swap request list.
    """

    async def list_swap_requests(self, refresh: bool = False) -> list[SwapRequest]:
        """
        List the current user's swap requests (sent and received).

        Args:
            refresh: Bypass the cache

        Returns:
            Swap requests, served from cache unless invalidated
        """
        ...

    async def create_swap_request(
        self,
        requester_id: str,
        target_id: str,
        sender_skill: Optional[str] = None,
        receiver_skill: Optional[str] = None,
        message: str = "",
    ) -> SwapRequest:
        """
        Send a new swap request.

        Raises:
            SwapRequestValidationError: If either skill is empty (no request is sent)
            RequestFailure: With a generic message on any failure
        """
        ...

    async def update_swap_request(self, request_id: str, edit: SwapRequestEdit) -> SwapRequest:
        """
        Replace the skills and message of a swap request.

        Raises:
            RequestFailure: With the server message on failure
        """
        ...

    async def update_status(self, request_id: str, status: SwapStatus) -> SwapRequest:
        """Accept, reject, cancel, or complete a swap request."""
        ...

    async def delete_swap_request(self, request_id: str) -> None:
        """Delete a swap request."""
        ...
