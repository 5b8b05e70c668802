"""
Base class for API-backed services.

Provides a common abstraction layer for services that talk to the
SkillSwap API, encapsulating client access, the shared query cache,
and dict-to-model mapping.
"""

from typing import Any, Optional, TypeVar, Generic

from pydantic import BaseModel

from .cache import QueryCache
from .http import ApiClient


T = TypeVar("T", bound=BaseModel)


class BaseApiService(Generic[T]):
    """
    Base class for all API-backed services.

    Provides common functionality for remote data access:
    - API client access via self._api
    - Query cache access via self._cache
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific calls and handle
    dict-to-Pydantic model mapping with _map / _map_list.

    Example:
        class SwapRequestService(BaseApiService[SwapRequest]):
            async def get(self, request_id: str) -> SwapRequest:
                data = await self._api.get(f"/api/swap-requests/{request_id}")
                return self._map(data)
    """

    model: type[T]

    def __init__(self, api: ApiClient, cache: Optional[QueryCache] = None) -> None:
        """
        Initialize the service.

        Args:
            api: API client used for every request.
            cache: Query cache shared with other services. A private
                   cache is created when omitted.
        """
        self._api = api
        self._cache = cache if cache is not None else QueryCache()

    def _map(self, data: Any) -> T:
        return self.model.model_validate(data)

    def _map_list(self, data: Any) -> list[T]:
        if not isinstance(data, list):
            return []
        return [self._map(item) for item in data]
